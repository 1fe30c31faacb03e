"""
Models Module
=============
Enums and dataclasses shared by every layer of the engine.
"""
