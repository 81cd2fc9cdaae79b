"""Core Layer - pure domain logic, no IO, no async, no HTTP.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - All functions are pure and deterministic (layout, URL parsing, SVG, embed code)

Design Decisions:
    - Functional core separated from imperative shell: the vector renderer lives
      here, the raster renderer (needs avatar IO) lives in services/
"""
