"""
Projects Management Endpoint

CRUD for mock projects plus project-wide API key management.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.logging_config import logger
from app.core.security import mask_api_key
from app.schemas.project import (
    ApiKeyCreated,
    ProjectCreate,
    ProjectDetailResponse,
    ProjectResponse,
    ProjectUpdate,
)
from app.services.project_repository import ProjectRepository

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("")
async def list_projects(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(10, ge=1, le=100, description="Items per page"),
    db: AsyncSession = Depends(get_db)
):
    """List projects, newest first"""
    result = await ProjectRepository(db).list_projects(page, page_size)
    result["items"] = [ProjectResponse.model_validate(p) for p in result["items"]]
    return {"success": True, "data": result}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db)
):
    project = await ProjectRepository(db).create_project(project_data)
    return {"success": True, "data": ProjectResponse.model_validate(project)}


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Get a project together with its endpoint definitions"""
    project = await ProjectRepository(db).get_project(project_id, with_endpoints=True)
    return {"success": True, "data": ProjectDetailResponse.model_validate(project)}


@router.put("/{project_id}")
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db)
):
    project = await ProjectRepository(db).update_project(project_id, project_data)
    return {"success": True, "data": ProjectResponse.model_validate(project)}


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    """Delete a project and every endpoint it owns"""
    await ProjectRepository(db).delete_project(project_id)
    return {"success": True, "data": {}}


# ==================== API Keys ====================

@router.post("/{project_id}/api-keys", status_code=status.HTTP_201_CREATED)
async def create_project_api_key(
    project_id: str,
    db: AsyncSession = Depends(get_db)
):
    """
    Generate a project-wide API key.

    The key is accepted by every endpoint of the project that requires auth.
    """
    repository = ProjectRepository(db)
    key = await repository.add_api_key(project_id)
    project = await repository.get_project(project_id)

    logger.info(f"[Projects] Issued API key {mask_api_key(key)} for project {project_id}")
    return {"success": True, "data": ApiKeyCreated(key=key, api_keys=project.api_keys)}


@router.delete("/{project_id}/api-keys/{key}")
async def revoke_project_api_key(
    project_id: str,
    key: str,
    db: AsyncSession = Depends(get_db)
):
    project = await ProjectRepository(db).remove_api_key(project_id, key)

    logger.info(f"[Projects] Revoked API key {mask_api_key(key)} for project {project_id}")
    return {"success": True, "data": ProjectResponse.model_validate(project)}
