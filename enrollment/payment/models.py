"""Payment model for the database."""

from sqlalchemy import Column, Integer, Float, Text, ForeignKey

from enrollment.core.database import Base, created_at_column


class Payment(Base):
    """Payment model for storing amounts received against a record."""
    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"))  # No cascade on record removal
    amount = Column(Float, nullable=False)
    payment_date = Column(Text, nullable=False)  # Caller-supplied, free text
    created_at = created_at_column()
