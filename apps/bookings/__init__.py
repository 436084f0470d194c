"""Bookings app package.

This app encapsulates the booking engine: the availability check over a
vehicle's calendar, booking creation under a per-vehicle row lock, the
status lifecycle driven by administrators and owners, and booking
statistics.
"""
