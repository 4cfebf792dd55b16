"""ORM models for application users and their password credentials."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from alliance.auth.roles import UserRole
from alliance.models.base import Base


class User(Base):
    """
    User account for session authentication and role-based access control.

    role: USER, ADMIN or SUPERADMIN. The password hash lives in its own table so that a
    user can exist before a password has been set up.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(
        Enum(UserRole, name="user_role", native_enum=False, length=32),
        nullable=False,
        default=UserRole.USER,
    )
    contact_id = Column(Integer, ForeignKey("contacts.id"), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    contact = relationship("Contact", lazy="joined")
    password = relationship(
        "Password",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )


class Password(Base):
    """Salted bcrypt hash owned by exactly one user."""

    __tablename__ = "passwords"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    hash = Column(String(255), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    user = relationship("User", back_populates="password")
