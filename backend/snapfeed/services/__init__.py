"""Services Layer — the database-facing half of every operation.

Invariants:
    - One class per concern, constructed per request with an AsyncSession
    - Services raise SnapfeedError subclasses; routes never translate errors themselves
    - Write services commit exactly once per logical operation
"""
