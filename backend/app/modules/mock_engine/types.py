"""
Plain data carried through the mock engine.

The engine never touches the ORM: the repository layer converts rows into
these dataclasses so every engine step is a pure function of its inputs.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ResponseType(str, Enum):
    LIST = "list"
    SINGLE = "single"


@dataclass(frozen=True)
class EndpointDefinition:
    """One configured mock route"""
    path: str
    method: str
    schema_definition: Any
    id: Optional[str] = None
    count: int = 10
    require_auth: bool = False
    api_keys: Tuple[str, ...] = ()
    delay: int = 0
    response_type: ResponseType = ResponseType.LIST
    parameter_path: Optional[str] = ":id"
    response_http_status: str = "200"
    support_pagination: bool = False

    def __post_init__(self):
        # Normalize the way the storage layer does so hand-built
        # definitions (tests, fixtures) behave like stored ones
        path = self.path or "/"
        if not path.startswith("/"):
            path = "/" + path
        object.__setattr__(self, "path", path)
        object.__setattr__(self, "method", str(self.method).upper())
        object.__setattr__(self, "response_type", ResponseType(self.response_type))
        object.__setattr__(self, "api_keys", tuple(self.api_keys or ()))

    @property
    def is_single(self) -> bool:
        return self.response_type == ResponseType.SINGLE


@dataclass(frozen=True)
class ProjectDefinition:
    """Project-level settings the engine consults (auth)"""
    id: str
    name: str = ""
    require_auth: bool = False
    api_keys: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "api_keys", tuple(self.api_keys or ()))


@dataclass
class MockRequest:
    """Inbound mock call: method, path tail after the project id, query, headers"""
    method: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.method = self.method.upper()
        if not self.path.startswith("/"):
            self.path = "/" + self.path
        # Header lookups are case-insensitive
        self.headers = {k.lower(): v for k, v in (self.headers or {}).items()}

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name.lower())


@dataclass
class MockResponse:
    """Outbound mock result; ``body`` of None means an empty body"""
    status_code: int
    body: Any = None
    endpoint_id: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.body is None


@dataclass
class EndpointMatch:
    """Selected endpoint plus the path parameters bound while matching it"""
    endpoint: EndpointDefinition
    params: Dict[str, str] = field(default_factory=dict)

