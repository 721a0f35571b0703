"""
Endpoints Management Endpoint

Create, inspect, update and delete the mock routes of a project.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.endpoint import EndpointCreate, EndpointResponse, EndpointUpdate
from app.services.project_repository import ProjectRepository

router = APIRouter(tags=["Endpoints"])


@router.get("/projects/{project_id}/endpoints")
async def list_endpoints(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    """List a project's endpoints in dispatch order"""
    endpoints = await ProjectRepository(db).list_endpoints(project_id)
    return {
        "success": True,
        "count": len(endpoints),
        "data": [EndpointResponse.model_validate(e) for e in endpoints],
    }


@router.post("/projects/{project_id}/endpoints", status_code=status.HTTP_201_CREATED)
async def create_endpoint(
    project_id: str,
    endpoint_data: EndpointCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Add an endpoint to a project.

    ``schema_definition`` and ``count`` default to the project's values.
    Returns 409 when the project already has the same path, method and
    response type.
    """
    endpoint = await ProjectRepository(db).create_endpoint(project_id, endpoint_data)
    return {"success": True, "data": EndpointResponse.model_validate(endpoint)}


@router.get("/projects/{project_id}/endpoints/{endpoint_id}")
async def get_endpoint(
    project_id: str,
    endpoint_id: str,
    db: AsyncSession = Depends(get_db)
):
    endpoint = await ProjectRepository(db).get_endpoint(endpoint_id, project_id=project_id)
    return {"success": True, "data": EndpointResponse.model_validate(endpoint)}


@router.put("/endpoints/{endpoint_id}")
async def update_endpoint(
    endpoint_id: str,
    endpoint_data: EndpointUpdate,
    db: AsyncSession = Depends(get_db)
):
    endpoint = await ProjectRepository(db).update_endpoint(endpoint_id, endpoint_data)
    return {"success": True, "data": EndpointResponse.model_validate(endpoint)}


@router.delete("/endpoints/{endpoint_id}")
async def delete_endpoint(
    endpoint_id: str,
    db: AsyncSession = Depends(get_db)
):
    await ProjectRepository(db).delete_endpoint(endpoint_id)
    return {"success": True, "data": {}}
