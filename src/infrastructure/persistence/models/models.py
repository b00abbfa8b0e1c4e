from datetime import datetime, timezone
from sqlalchemy import Column, String, LargeBinary, DateTime
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True, index=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

