"""Services Layer - raster rendering and per-request gallery orchestration.

Invariants:
    - Services may await IO (avatars, GitHub) but hold no state between calls
"""
