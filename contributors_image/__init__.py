"""Contributors Image Package - repository contributor galleries as PNG/SVG.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
