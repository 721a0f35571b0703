from app.services.project_repository import ProjectRepository
from app.services.mock_service import (
    serve_mock_request,
    to_endpoint_definition,
    to_project_definition,
)

__all__ = [
    "ProjectRepository",
    "serve_mock_request",
    "to_endpoint_definition",
    "to_project_definition",
]
