"""
bookingrules - scheduling-conflict engine for appointment booking.
"""

__version__ = "0.1.0"
