"""Additional costs domain - operating costs outside bookings"""
