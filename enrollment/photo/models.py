"""Photo attachment model for the database."""

from sqlalchemy import Column, Integer, Text, ForeignKey

from enrollment.core.database import Base, created_at_column


class Photo(Base):
    """Photo model binding a stored image file to a record slot."""
    __tablename__ = "user_photos"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"))
    photo_path = Column(Text, nullable=False)
    photo_order = Column(Integer, nullable=False)  # 1-based slot
    original_filename = Column(Text)
    created_at = created_at_column()
