from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey, JSON, Boolean, Index
from sqlalchemy.orm import relationship
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid
from app.modules.mock_engine.types import HttpMethod, ResponseType


def _enum_values(enum_cls):
    """Persist enum values ('list') rather than member names ('LIST')"""
    return [member.value for member in enum_cls]


class Endpoint(Base):
    """One configured mock route of a project"""
    __tablename__ = "endpoints"

    __table_args__ = (
        Index('ix_endpoints_project_id', 'project_id'),
        Index('ix_endpoints_project_route', 'project_id', 'path', 'method', 'response_type'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    project_id = Column(GUID, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)

    path = Column(String(1000), nullable=False)  # Always starts with '/'
    method = Column(
        SQLEnum(HttpMethod, native_enum=False, length=10, values_callable=_enum_values),
        nullable=False,
    )
    description = Column(Text, nullable=True)

    # Response generation
    schema_definition = Column(JSON, nullable=False)
    count = Column(Integer, nullable=False, default=10)  # 1..10000
    response_type = Column(
        SQLEnum(ResponseType, native_enum=False, length=10, values_callable=_enum_values),
        nullable=False,
        default=ResponseType.LIST,
    )
    parameter_path = Column(String(255), nullable=True, default=":id")
    response_http_status = Column(String(3), nullable=False, default="200")
    support_pagination = Column(Boolean, nullable=False, default=False)

    # Policy
    require_auth = Column(Boolean, nullable=False, default=False)
    api_keys = Column(JSON, nullable=False, default=list)
    delay = Column(Integer, nullable=False, default=0)  # ms, 0..5000

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    project = relationship("Project", back_populates="endpoints")

    def __repr__(self):
        return f"<Endpoint {self.method} {self.path} ({self.response_type})>"
