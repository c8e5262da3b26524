"""Pydantic Schemas: request/response validation for API endpoints and event payloads.

Invariants:
    - Schemas validate at system boundary (user input, API responses, broker messages)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
