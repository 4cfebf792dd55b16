"""SQLAlchemy declarative Base shared by every model."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base; its metadata drives alembic autogenerate and test schemas."""

    pass
