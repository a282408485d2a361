"""Settings domain - per-user preferences"""
