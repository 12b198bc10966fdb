"""ORM model for registered accounts."""

import enum

from sqlalchemy import Column, Integer, String, Text

from app.models.base import Base


class UserRole(str, enum.Enum):
    """Role carried on every account; new signups get USER."""

    USER = "user"
    ADMIN = "admin"


class User(Base):
    """
    Registered account.

    password and salt are the two halves of a SaltedHash and are always written together.
    data is an opaque per-user profile blob, empty on signup.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(24), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    salt = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=UserRole.USER.value)
    data = Column(Text, nullable=False, default="")
