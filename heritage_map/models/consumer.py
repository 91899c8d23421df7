"""
Consumer profile: only the tour plan part is owned by this service.
"""
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func

from heritage_map.core.db import Base


class ConsumerProfile(Base):
    __tablename__ = "consumer_profiles"

    id = Column(String(36), primary_key=True)
    # ordered list of {"id", "name", "city"} entries
    visit_places = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
