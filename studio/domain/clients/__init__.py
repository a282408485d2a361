"""Clients domain - client records and their booking history"""
