"""
Shared Kernel

Cross-cutting pieces used by every app: the JSON response envelope, the
pagination envelope, the error taxonomy with its DRF exception handler and
the DateRange value object the booking engine is built on.
"""
