"""Infrastructure Layer: connection pool, collaborator clients, logging.

Invariants:
    - Infrastructure never imports business rules from services/
    - All external calls wrapped with retry/timeout/error mapping

Design Decisions:
    - Resilient wrappers over raw clients (ADR: single responsibility)
"""
