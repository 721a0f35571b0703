from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List, Any
from datetime import datetime

from app.models.project import DEFAULT_COUNT, default_schema
from app.schemas.endpoint import EndpointResponse, MAX_COUNT, clean_api_keys, validate_schema_definition


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    default_schema: Any = Field(default_factory=default_schema)
    default_count: int = Field(DEFAULT_COUNT, ge=1, le=MAX_COUNT)
    require_auth: bool = False
    api_keys: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

    @field_validator("default_schema")
    @classmethod
    def schema_is_template(cls, v: Any) -> Any:
        return validate_schema_definition(v)

    @field_validator("api_keys")
    @classmethod
    def strip_keys(cls, v: List[str]) -> List[str]:
        return clean_api_keys(v)


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    default_schema: Optional[Any] = None
    default_count: Optional[int] = Field(None, ge=1, le=MAX_COUNT)
    require_auth: Optional[bool] = None
    api_keys: Optional[List[str]] = None

    @field_validator("default_schema")
    @classmethod
    def schema_is_template(cls, v: Any) -> Any:
        if v is None:
            return v
        return validate_schema_definition(v)

    @field_validator("api_keys")
    @classmethod
    def strip_keys(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return clean_api_keys(v) if v is not None else v


class ProjectResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    default_schema: Any
    default_count: int
    require_auth: bool
    api_keys: List[str]
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProjectDetailResponse(ProjectResponse):
    endpoints: List[EndpointResponse] = []


class ApiKeyCreated(BaseModel):
    key: str
    api_keys: List[str]
