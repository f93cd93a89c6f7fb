"""Services Layer — stores (SQLAlchemy) and the auth/task services built on them.

Invariants:
    - Stores implement the core/repository_protocols contracts
    - Services receive stores and identities explicitly; no ambient state

Design Decisions:
    - One file per component for locality (credential store, task store, two services)
"""
