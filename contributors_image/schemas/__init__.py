"""Pydantic Schemas - request/response validation at the HTTP boundaries.

Invariants:
    - Schemas validate at system boundaries (GitHub payload in, JSON API out)
    - Converted to core/ dataclasses before reaching domain logic
"""
