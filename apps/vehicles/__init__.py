"""Vehicles app package.

This app encapsulates the vehicle catalogue: listings with their image
media, filtered and geographic search, and the background cleanup of
image files removed from a listing.
"""
