"""SQLAlchemy Declarative Base — shared base class for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - Constraint names are deterministic (naming convention), so migrations can
      reference the users_username_key / users_email_key unique constraints

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "%(table_name)s_%(column_0_name)s_key",
    "fk": "%(table_name)s_%(column_0_name)s_fkey",
    "pk": "%(table_name)s_pkey",
}


class Base(DeclarativeBase):
    """Base class for all task-tracker ORM models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
