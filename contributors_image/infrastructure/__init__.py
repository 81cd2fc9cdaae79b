"""Infrastructure Layer - external service clients and cross-cutting concerns.

Invariants:
    - All external calls bounded by a timeout and mapped to core/errors.py
    - Logging setup lives here (observability.py)
"""
