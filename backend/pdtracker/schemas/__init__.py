"""Pydantic Schemas - request validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies)
    - Each schema converts into a core/ value object before reaching a service

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
