"""
Reviews domain.

Renters review vehicles from their completed bookings. Every write to a
review recomputes the vehicle's ``average_rating`` and ``total_reviews``
rollup.
"""
