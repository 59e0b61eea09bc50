from sqlalchemy import Column, String, DateTime, JSON
from .db import Base

# -----------------------------
# ORM model for the cached fact snapshot
# -----------------------------
class HostFacts(Base):
    __tablename__ = "facts"
    # One row per inventory host; `data` holds the raw nested facts
    hostname    = Column(String, primary_key=True)
    data        = Column(JSON, nullable=False, default=dict)
    modified_at = Column(DateTime(timezone=True))             # when the facts were gathered

    def __repr__(self):
        return f"<HostFacts(hostname={self.hostname}, modified_at={self.modified_at})>"
