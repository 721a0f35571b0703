"""
Project Repository - persistence for projects and their endpoint definitions

The mock engine only reads through ``find_project`` and
``find_endpoints_by_project``; everything else backs the management API.
"""

from typing import Optional, List
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    ApiKeyNotFoundError,
    DuplicateEndpointError,
    EndpointNotFoundError,
    ProjectNotFoundError,
    ValidationError,
)
from app.core.logging_config import logger
from app.core.security import generate_api_key
from app.core.types import is_valid_uuid
from app.models.endpoint import Endpoint
from app.models.project import Project
from app.schemas.endpoint import EndpointCreate, EndpointUpdate
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.utils.pagination import paginate


def _first_error_message(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "__root__")
    message = first.get("msg", "Invalid value").removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


class ProjectRepository:
    """Async data access for projects and endpoints"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ========== Read side used by the mock engine ==========

    async def find_project(self, project_id: str) -> Optional[Project]:
        """Project by id, or None when the id is malformed or unknown"""
        if not is_valid_uuid(project_id):
            return None
        result = await self.db.execute(select(Project).where(Project.id == str(project_id)))
        return result.scalar_one_or_none()

    async def find_endpoints_by_project(self, project_id: str) -> List[Endpoint]:
        """All endpoints of a project in creation order (the dispatch order)"""
        result = await self.db.execute(
            select(Endpoint)
            .where(Endpoint.project_id == str(project_id))
            .order_by(Endpoint.created_at, Endpoint.id)
        )
        return list(result.scalars().all())

    # ========== Project Operations ==========

    async def get_project(self, project_id: str, with_endpoints: bool = False) -> Project:
        if not is_valid_uuid(project_id):
            raise ProjectNotFoundError(project_id)

        query = select(Project).where(Project.id == str(project_id))
        if with_endpoints:
            query = query.options(selectinload(Project.endpoints)).execution_options(populate_existing=True)
        result = await self.db.execute(query)
        project = result.scalar_one_or_none()
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def list_projects(self, page: int = 1, page_size: int = 10) -> dict:
        query = select(Project).order_by(Project.created_at.desc())
        count_query = select(func.count(Project.id))
        return await paginate(self.db, query, page, page_size, count_query=count_query)

    async def create_project(self, data: ProjectCreate) -> Project:
        project = Project(**data.model_dump())
        self.db.add(project)
        await self.db.commit()
        await self.db.refresh(project)

        logger.info(f"[Projects] Created project {project.id} ({project.name})")
        return project

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        project = await self.get_project(project_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("name", "default_schema", "default_count", "require_auth", "api_keys"):
                continue
            setattr(project, field, value)

        await self.db.commit()
        await self.db.refresh(project)
        return project

    async def delete_project(self, project_id: str) -> None:
        # Endpoints must be loaded for the ORM cascade to remove them
        project = await self.get_project(project_id, with_endpoints=True)

        await self.db.delete(project)
        await self.db.commit()

        logger.info(f"[Projects] Deleted project {project_id}")

    async def add_api_key(self, project_id: str) -> str:
        """Generate a project-wide key and store it"""
        project = await self.get_project(project_id)
        key = generate_api_key()
        # Reassign so the JSON column is flagged dirty
        project.api_keys = [*(project.api_keys or []), key]
        await self.db.commit()
        await self.db.refresh(project)
        return key

    async def remove_api_key(self, project_id: str, key: str) -> Project:
        project = await self.get_project(project_id)
        keys = list(project.api_keys or [])
        if key not in keys:
            raise ApiKeyNotFoundError(project_id)
        project.api_keys = [k for k in keys if k != key]
        await self.db.commit()
        await self.db.refresh(project)
        return project

    # ========== Endpoint Operations ==========

    async def list_endpoints(self, project_id: str) -> List[Endpoint]:
        await self.get_project(project_id)
        return await self.find_endpoints_by_project(project_id)

    async def get_endpoint(self, endpoint_id: str, project_id: Optional[str] = None) -> Endpoint:
        if not is_valid_uuid(endpoint_id):
            raise EndpointNotFoundError(endpoint_id)

        query = select(Endpoint).where(Endpoint.id == str(endpoint_id))
        if project_id is not None:
            query = query.where(Endpoint.project_id == str(project_id))
        result = await self.db.execute(query)
        endpoint = result.scalar_one_or_none()
        if endpoint is None:
            raise EndpointNotFoundError(endpoint_id)
        return endpoint

    async def _ensure_unique(
        self,
        project_id: str,
        data: EndpointCreate,
        exclude_id: Optional[str] = None,
    ) -> None:
        query = select(Endpoint.id).where(
            Endpoint.project_id == str(project_id),
            Endpoint.path == data.path,
            Endpoint.method == data.method,
            Endpoint.response_type == data.response_type,
        )
        if exclude_id is not None:
            query = query.where(Endpoint.id != str(exclude_id))
        result = await self.db.execute(query)
        if result.first() is not None:
            raise DuplicateEndpointError(data.path, data.method.value, data.response_type.value)

    async def create_endpoint(self, project_id: str, data: EndpointCreate) -> Endpoint:
        project = await self.get_project(project_id)
        await self._ensure_unique(project.id, data)

        values = data.model_dump()
        if values["schema_definition"] is None:
            values["schema_definition"] = project.default_schema
        if values["count"] is None:
            values["count"] = project.default_count

        endpoint = Endpoint(project_id=project.id, **values)
        self.db.add(endpoint)
        await self.db.commit()
        await self.db.refresh(endpoint)

        logger.info(
            f"[Endpoints] Created {endpoint.method.value} {endpoint.path} "
            f"({endpoint.response_type.value}) in project {project.id}"
        )
        return endpoint

    async def update_endpoint(self, endpoint_id: str, data: EndpointUpdate) -> Endpoint:
        endpoint = await self.get_endpoint(endpoint_id)

        merged = {
            "path": endpoint.path,
            "method": endpoint.method.value,
            "description": endpoint.description,
            "schema_definition": endpoint.schema_definition,
            "count": endpoint.count,
            "require_auth": endpoint.require_auth,
            "api_keys": endpoint.api_keys or [],
            "delay": endpoint.delay,
            "response_type": endpoint.response_type.value,
            "parameter_path": endpoint.parameter_path,
            "response_http_status": endpoint.response_http_status,
            "support_pagination": endpoint.support_pagination,
        }
        merged.update(data.model_dump(exclude_unset=True))

        try:
            validated = EndpointCreate(**merged)
        except PydanticValidationError as e:
            raise ValidationError(_first_error_message(e))

        await self._ensure_unique(endpoint.project_id, validated, exclude_id=endpoint.id)

        for field, value in validated.model_dump().items():
            if value is None and field in ("schema_definition", "count"):
                continue
            setattr(endpoint, field, value)

        await self.db.commit()
        await self.db.refresh(endpoint)
        return endpoint

    async def delete_endpoint(self, endpoint_id: str) -> Endpoint:
        endpoint = await self.get_endpoint(endpoint_id)
        await self.db.delete(endpoint)
        await self.db.commit()

        logger.info(f"[Endpoints] Deleted endpoint {endpoint_id}")
        return endpoint
