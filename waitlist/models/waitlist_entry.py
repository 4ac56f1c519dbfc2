from sqlalchemy import Column, Integer, Text, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from waitlist.core.database import Base


class WaitlistEntry(Base):
    __tablename__ = "waitlist"
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Stored exactly as submitted after trimming; uniqueness is case-sensitive
    email = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("email", name="uq_waitlist_email"),
        {"sqlite_autoincrement": True},
    )
