"""Products domain - jewelry catalog"""
