"""Core Layer — pure domain logic, no IO, no async, no storage.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Validation, lifecycle guard and sort policy are pure and deterministic
      (the current instant is always passed in)

Design Decisions:
    - Functional core separated from imperative shell
"""
