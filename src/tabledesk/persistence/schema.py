from sqlalchemy import Column, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class KVEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)  # JSON-encoded snapshot
    updated_at_utc = Column(String, nullable=False)  # ISO 8601 string
