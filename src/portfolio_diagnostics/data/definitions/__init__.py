"""
Static Definitions
==================
Asset-class assumptions, crisis scenarios, sector taxonomy, benchmarks.
All tables are module-level constants; nothing here is mutated at runtime.
"""
