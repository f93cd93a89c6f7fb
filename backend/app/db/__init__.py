"""Database Package — SQLAlchemy declarative Base shared by ORM models and Alembic.

Invariants:
    - All sessions are async (AsyncSession), created by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL in production, aiosqlite in tests
"""
