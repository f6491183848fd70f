"""Database models for delivery problem tracking."""
from __future__ import annotations

from sqlalchemy import BigInteger, Column, Integer, SmallInteger, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class EmailBounce(Base):
    """One bounce or complaint, laid out like the auth db ``emailBounces`` table."""

    __tablename__ = "email_bounces"

    id = Column(Integer, primary_key=True)
    email = Column(String(320), nullable=False, index=True)
    bounce_type = Column(SmallInteger, nullable=False)
    bounce_sub_type = Column(SmallInteger, nullable=False, default=0)
    # Milliseconds since the epoch, as stored by the auth db.
    created_at = Column(BigInteger, nullable=False, index=True)
