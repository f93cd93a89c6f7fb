"""Core Layer — domain types, errors, rules and boundary protocols. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Rule functions are pure and deterministic; protocols only describe async IO

Design Decisions:
    - Functional core separated from imperative shell (impureim sandwich)
"""
