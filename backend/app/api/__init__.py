"""API Layer — FastAPI routes, auth gate, dependency providers and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses
    - Task routes are reachable only through the auth gate

Design Decisions:
    - Thin routes delegate to services
"""
