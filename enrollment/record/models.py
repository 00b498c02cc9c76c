"""Record model for the database."""

from sqlalchemy import Column, Integer, Float, Text

from enrollment.core.database import Base, created_at_column


class Record(Base):
    """Record model representing an enrolled person in the system."""
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    mobile = Column(Text, nullable=False)

    # Relatives
    father_name = Column(Text)
    father_mobile = Column(Text)
    relative_name = Column(Text)
    relative_mobile = Column(Text)
    spouse_name = Column(Text)
    spouse_mobile = Column(Text)

    # Identification numbers
    id_number = Column(Text)
    b_number = Column(Text)
    s_id_number = Column(Text)
    v_number = Column(Text)

    # Free text, not validated as dates
    admission_date = Column(Text)
    validity_date = Column(Text)

    total_amount = Column(Float, default=0, server_default="0")
    created_at = created_at_column()
