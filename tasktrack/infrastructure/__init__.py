"""Infrastructure Layer — storage implementations and cross-cutting concerns.

Invariants:
    - Stores implement the Protocols in core/repository_protocols.py
    - Stores hold records only; rules live in core/ and services/
"""
