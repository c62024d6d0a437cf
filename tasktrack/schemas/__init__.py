"""Pydantic Schemas — request/response shapes for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core records: schemas are API contracts, records are domain values
"""
