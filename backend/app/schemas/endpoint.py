from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Optional, List, Any
from datetime import datetime

from app.core.exceptions import InvalidSchemaDefinitionError
from app.modules.mock_engine.path_matcher import is_bare_parameter
from app.modules.mock_engine.status_codes import (
    METHOD_STATUS_CODES,
    default_status_for_method,
    is_valid_status_for_method,
)
from app.modules.mock_engine.template import parse_template
from app.modules.mock_engine.types import HttpMethod, ResponseType


MAX_COUNT = 10000
MAX_DELAY_MS = 5000


def normalize_path(path: str) -> str:
    path = path.strip()
    return path if path.startswith("/") else "/" + path


def validate_schema_definition(value: Any) -> Any:
    try:
        parse_template(value)
    except InvalidSchemaDefinitionError as e:
        raise ValueError(e.message)
    return value


def clean_api_keys(keys: Optional[List[str]]) -> List[str]:
    """Strip keys, drop blanks and duplicates, keep order"""
    cleaned: List[str] = []
    for key in keys or []:
        key = key.strip()
        if key and key not in cleaned:
            cleaned.append(key)
    return cleaned


class EndpointBase(BaseModel):
    path: str = Field(..., min_length=1, max_length=1000)
    method: HttpMethod
    description: Optional[str] = None
    schema_definition: Optional[Any] = None
    count: Optional[int] = Field(None, ge=1, le=MAX_COUNT)
    require_auth: bool = False
    api_keys: List[str] = Field(default_factory=list)
    delay: int = Field(0, ge=0, le=MAX_DELAY_MS)
    response_type: ResponseType = ResponseType.LIST
    parameter_path: Optional[str] = ":id"
    response_http_status: Optional[str] = None
    support_pagination: bool = False

    @field_validator("path")
    @classmethod
    def path_has_leading_slash(cls, v: str) -> str:
        return normalize_path(v)

    @field_validator("method", mode="before")
    @classmethod
    def uppercase_method(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("schema_definition")
    @classmethod
    def schema_is_template(cls, v: Any) -> Any:
        if v is None:
            return v
        return validate_schema_definition(v)

    @field_validator("api_keys")
    @classmethod
    def strip_keys(cls, v: List[str]) -> List[str]:
        return clean_api_keys(v)

    @field_validator("parameter_path")
    @classmethod
    def parameter_path_is_single_param(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip().strip("/")
        if not is_bare_parameter(v):
            raise ValueError("parameter_path must be a single ':name' segment, e.g. ':id'")
        return v

    @field_validator("response_http_status", mode="before")
    @classmethod
    def status_as_string(cls, v: Any) -> Any:
        return str(v).strip() if v is not None else v

    @model_validator(mode="after")
    def check_policy(self):
        if self.response_http_status is None:
            self.response_http_status = default_status_for_method(self.method.value)
        elif not is_valid_status_for_method(self.method.value, self.response_http_status):
            allowed = ", ".join(str(code) for code in sorted(METHOD_STATUS_CODES[self.method]))
            raise ValueError(
                f"response_http_status {self.response_http_status} is not valid for "
                f"{self.method.value} (allowed: {allowed})"
            )

        if self.require_auth and not self.api_keys:
            raise ValueError("api_keys must not be empty when require_auth is enabled")
        return self


class EndpointCreate(EndpointBase):
    """Create payload; schema_definition and count fall back to project defaults"""


class EndpointUpdate(BaseModel):
    """Partial update; the merged record is re-validated as EndpointCreate"""
    path: Optional[str] = None
    method: Optional[str] = None
    description: Optional[str] = None
    schema_definition: Optional[Any] = None
    count: Optional[int] = None
    require_auth: Optional[bool] = None
    api_keys: Optional[List[str]] = None
    delay: Optional[int] = None
    response_type: Optional[ResponseType] = None
    parameter_path: Optional[str] = None
    response_http_status: Optional[str] = None
    support_pagination: Optional[bool] = None


class EndpointResponse(BaseModel):
    id: str
    project_id: str
    path: str
    method: HttpMethod
    description: Optional[str] = None
    schema_definition: Any
    count: int
    require_auth: bool
    api_keys: List[str]
    delay: int
    response_type: ResponseType
    parameter_path: Optional[str] = None
    response_http_status: str
    support_pagination: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class EndpointSummary(BaseModel):
    """Compact row for the mock debug listing"""
    id: str
    path: str
    method: HttpMethod
    response_type: ResponseType
    parameter_path: Optional[str] = None
    require_auth: bool

    model_config = ConfigDict(from_attributes=True)
