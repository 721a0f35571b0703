"""
Mock traffic endpoint

Every method under ``{MOCK_PREFIX}/{project_id}/...`` is answered by the mock
engine from the project's stored endpoint definitions.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import InvalidProjectReferenceError
from app.core.rate_limiter import mock_rate_limit
from app.modules.mock_engine.engine import error_to_response
from app.modules.mock_engine.types import MockResponse
from app.schemas.endpoint import EndpointSummary
from app.services.mock_service import serve_mock_request
from app.services.project_repository import ProjectRepository

router = APIRouter(tags=["Mock"])

MOCK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def render(response: MockResponse) -> Response:
    if response.is_empty:
        return Response(status_code=response.status_code)
    return JSONResponse(status_code=response.status_code, content=response.body)


@router.get("/{project_id}/_debug")
async def debug_project_endpoints(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    """List what a project serves. Outside DEBUG the path is ordinary mock traffic."""
    if not settings.DEBUG:
        return render(await serve_mock_request(db, project_id, "GET", "/_debug"))

    repository = ProjectRepository(db)
    project = await repository.find_project(project_id)
    if project is None:
        return render(error_to_response(InvalidProjectReferenceError(project_id)))

    endpoints = await repository.find_endpoints_by_project(project.id)
    return {
        "project": {"id": project.id, "name": project.name, "require_auth": project.require_auth},
        "endpoints": [EndpointSummary.model_validate(e) for e in endpoints],
    }


@router.api_route("/{project_id}", methods=MOCK_METHODS, include_in_schema=False)
@router.api_route("/{project_id}/{path:path}", methods=MOCK_METHODS)
@mock_rate_limit()
async def serve_mock(
    request: Request,
    project_id: str,
    path: str = "",
    db: AsyncSession = Depends(get_db)
):
    """Serve a mock response for any method and path of a project"""
    response = await serve_mock_request(
        db,
        project_id,
        method=request.method,
        path="/" + path,
        query=dict(request.query_params),
        headers=dict(request.headers),
    )
    return render(response)
