"""Snapfeed Application Package — social feed backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
