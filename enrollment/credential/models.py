"""Credential model for the database."""

from sqlalchemy import Column, Integer, Text

from enrollment.core.database import Base, created_at_column


class Credential(Base):
    """Administrative login allowed to use the application."""
    __tablename__ = "admin_users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    username = Column(Text, unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)  # salt:digest
    created_at = created_at_column()
