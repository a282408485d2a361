"""Bookings domain - appointments with their service, product and broken-product lines"""
