"""Task Tracker Application Package — multi-tenant task tracking with owner isolation.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
