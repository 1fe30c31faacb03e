"""
Analytics Module
================
Portfolio metrics and the per-category diagnostic analyzers.
"""
