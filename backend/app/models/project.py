from sqlalchemy import Column, String, DateTime, Integer, Text, JSON, Boolean, Index
from sqlalchemy.orm import relationship
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid


DEFAULT_SCHEMA = {
    "id": "(random:uuid)",
    "name": "(random:name)",
    "email": "(random:email)",
    "createdAt": "(random:datetime)",
}

DEFAULT_COUNT = 10


def default_schema() -> dict:
    return dict(DEFAULT_SCHEMA)


class Project(Base):
    """Mock API project: a named group of endpoints plus shared auth settings"""
    __tablename__ = "projects"

    __table_args__ = (
        Index('ix_projects_created_at', 'created_at'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Defaults applied to endpoints created without their own schema/count
    default_schema = Column(JSON, nullable=False, default=default_schema)
    default_count = Column(Integer, nullable=False, default=DEFAULT_COUNT)

    # Project-wide API keys; accepted by every endpoint of the project
    require_auth = Column(Boolean, nullable=False, default=False)
    api_keys = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    endpoints = relationship(
        "Endpoint",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Endpoint.created_at",
    )

    def __repr__(self):
        return f"<Project {self.id} {self.name!r}>"
