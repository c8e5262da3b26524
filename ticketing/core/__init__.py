"""Core Layer: pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, repositories/ or db/
    - Functions are pure and deterministic; protocols describe the shell

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
