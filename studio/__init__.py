"""Piercing studio management API"""
