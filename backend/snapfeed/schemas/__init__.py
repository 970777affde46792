"""Schemas — Pydantic models for API request validation and response serialization.

Invariants:
    - Response models are built from ORM rows via from_attributes, never by hand-written dicts
    - Request models validate shape only; existence checks happen in services
"""
