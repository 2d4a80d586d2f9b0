"""
Utility functions module.

Calendar arithmetic for monthly schedules and numeric input checks shared
by the calculations.
"""
