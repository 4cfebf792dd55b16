"""ORM model for contacts (donors, missionaries, staff)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from alliance.models.base import Base


class Contact(Base):
    """A person known to the organization; every user is linked to one."""

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
