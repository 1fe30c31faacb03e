"""
Utils Module
============
Logging, exception hierarchy and small numeric/formatting helpers.
"""
