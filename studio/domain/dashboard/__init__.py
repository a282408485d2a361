"""Dashboard domain - profitability report"""
