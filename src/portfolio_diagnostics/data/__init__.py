"""
Data Module
===========
Static market assumptions (definitions/) and holdings/client file loading.
"""
