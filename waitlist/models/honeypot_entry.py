from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.sql import func
from waitlist.core.database import Base


class HoneypotEntry(Base):
    """Submission that filled in the hidden decoy field.

    Kept apart from the real waitlist; the email is neither validated nor
    deduplicated.
    """
    __tablename__ = "waitlist_honeypot"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(Text, nullable=False)
    trap_value = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
