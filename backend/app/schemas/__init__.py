# Pydantic schemas
from app.schemas.endpoint import (
    EndpointCreate,
    EndpointUpdate,
    EndpointResponse,
    EndpointSummary,
)
from app.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectDetailResponse,
    ApiKeyCreated,
)

__all__ = [
    "EndpointCreate",
    "EndpointUpdate",
    "EndpointResponse",
    "EndpointSummary",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectDetailResponse",
    "ApiKeyCreated",
]
