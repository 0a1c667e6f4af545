"""
Shared infrastructure: settings, HTTP fetching, errors and field extraction helpers.
"""
