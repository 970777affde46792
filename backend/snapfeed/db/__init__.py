"""Database Package — declarative base shared by models and migrations.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
"""
