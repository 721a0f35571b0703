"""
Mock Service - bridges stored projects/endpoints and the mock engine
"""

from typing import Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidProjectReferenceError
from app.models.endpoint import Endpoint
from app.models.project import Project
from app.modules.mock_engine.engine import error_to_response, handle_mock_request
from app.modules.mock_engine.types import (
    EndpointDefinition,
    MockRequest,
    MockResponse,
    ProjectDefinition,
)
from app.services.project_repository import ProjectRepository


def _enum_value(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


def to_endpoint_definition(row: Endpoint) -> EndpointDefinition:
    return EndpointDefinition(
        id=str(row.id),
        path=row.path,
        method=_enum_value(row.method),
        schema_definition=row.schema_definition,
        count=row.count,
        require_auth=bool(row.require_auth),
        api_keys=tuple(row.api_keys or ()),
        delay=row.delay or 0,
        response_type=_enum_value(row.response_type),
        parameter_path=row.parameter_path,
        response_http_status=row.response_http_status,
        support_pagination=bool(row.support_pagination),
    )


def to_project_definition(row: Project) -> ProjectDefinition:
    return ProjectDefinition(
        id=str(row.id),
        name=row.name,
        require_auth=bool(row.require_auth),
        api_keys=tuple(row.api_keys or ()),
    )


async def serve_mock_request(
    db: AsyncSession,
    project_id: str,
    method: str,
    path: str,
    query: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
) -> MockResponse:
    """Load the project's endpoints and run one request through the engine"""
    request = MockRequest(
        method=method,
        path=path,
        query=dict(query or {}),
        headers=dict(headers or {}),
    )

    repository = ProjectRepository(db)
    project = await repository.find_project(project_id)
    if project is None:
        return error_to_response(InvalidProjectReferenceError(project_id))

    rows = await repository.find_endpoints_by_project(project.id)
    endpoints = [to_endpoint_definition(row) for row in rows]

    return await handle_mock_request(request, to_project_definition(project), endpoints)
