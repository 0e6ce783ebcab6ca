"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (function signatures, hex payloads)
    - EventKind from core/ used for event names

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
