"""Infrastructure Layer — database, password hashing, session tokens, logging.

Invariants:
    - Infrastructure imports from core/ only for error and identity types
    - Every third-party failure is mapped to a TaskTrackerError subclass at this boundary

Design Decisions:
    - One thin wrapper per external library (SQLAlchemy, bcrypt, PyJWT)
"""
