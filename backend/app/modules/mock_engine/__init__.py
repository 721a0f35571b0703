"""
Mock response generation engine.

Turns stored endpoint definitions plus an inbound request into a synthetic
JSON response. See ``engine.handle_mock_request`` for the full pipeline.
"""
from app.modules.mock_engine.types import (
    EndpointDefinition,
    EndpointMatch,
    HttpMethod,
    MockRequest,
    MockResponse,
    ProjectDefinition,
    ResponseType,
)
from app.modules.mock_engine.directives import DirectiveType, resolve
from app.modules.mock_engine.template import generate, generate_many, parse_template
from app.modules.mock_engine.path_matcher import PathMatch, match_path
from app.modules.mock_engine.dispatcher import dispatch, select_endpoint
from app.modules.mock_engine.assembler import assemble
from app.modules.mock_engine.engine import handle_mock_request

__all__ = [
    "EndpointDefinition",
    "EndpointMatch",
    "HttpMethod",
    "MockRequest",
    "MockResponse",
    "ProjectDefinition",
    "ResponseType",
    "DirectiveType",
    "resolve",
    "generate",
    "generate_many",
    "parse_template",
    "PathMatch",
    "match_path",
    "dispatch",
    "select_endpoint",
    "assemble",
    "handle_mock_request",
]
