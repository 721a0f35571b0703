"""
Endpoint selection and the per-request policies applied to the winner
(API key check, response status validation, artificial delay).
"""
import asyncio
from typing import Iterable, Optional

from app.core.config import settings
from app.core.exceptions import (
    MisconfiguredStatusCodeError,
    NoMatchingEndpointError,
    UnauthorizedError,
)
from app.core.logging_config import logger
from app.core.security import api_key_matches
from app.modules.mock_engine.path_matcher import match_path, split_path
from app.modules.mock_engine.status_codes import ALLOWED_STATUS_CODES
from app.modules.mock_engine.types import (
    EndpointDefinition,
    EndpointMatch,
    MockRequest,
    ProjectDefinition,
)


def _match_parameter_path(request_path: str, endpoint: EndpointDefinition) -> Optional[EndpointMatch]:
    """
    Single-item rule: the request is the endpoint's collection path with one
    identifier segment appended, e.g. '/users' + ':id' serves '/users/42'.
    Stricter than gating on the first segment alone: '/users/42/extra' does not
    match, and the bare collection path binds no parameter.
    """
    request_segments = split_path(request_path)
    if not request_segments:
        return None

    collection_path = "/" + "/".join(request_segments[:-1])
    collection = match_path(collection_path, endpoint.path)
    if not collection:
        return None

    item = match_path(request_path, endpoint.parameter_path)
    if not item:
        return None

    return EndpointMatch(endpoint, {**collection.params, **item.params})


def select_endpoint(
    method: str,
    request_path: str,
    endpoints: Iterable[EndpointDefinition],
) -> Optional[EndpointMatch]:
    """
    Pick the first endpoint (in enumeration order) that serves method + path.

    For each candidate a single-item endpoint tries its parameter path before
    its own path, so '/users/42' reaches the item route rather than failing
    against the collection.
    """
    method = method.upper()

    for endpoint in endpoints:
        if endpoint.method != method:
            continue

        if endpoint.is_single and endpoint.parameter_path:
            found = _match_parameter_path(request_path, endpoint)
            if found is not None:
                return found

        full = match_path(request_path, endpoint.path)
        if full:
            return EndpointMatch(endpoint, full.params)

    return None


def dispatch(
    method: str,
    request_path: str,
    endpoints: Iterable[EndpointDefinition],
) -> EndpointMatch:
    """Like select_endpoint, but raises NoMatchingEndpointError instead of returning None"""
    found = select_endpoint(method, request_path, endpoints)
    if found is None:
        raise NoMatchingEndpointError(method.upper(), request_path)
    return found


def requires_auth(endpoint: EndpointDefinition, project: Optional[ProjectDefinition]) -> bool:
    return endpoint.require_auth or bool(project and project.require_auth)


def authorize(
    endpoint: EndpointDefinition,
    project: Optional[ProjectDefinition],
    request: MockRequest,
) -> None:
    """Raise UnauthorizedError unless the request carries a key the endpoint or project accepts"""
    if not requires_auth(endpoint, project):
        return

    allowed = list(endpoint.api_keys)
    if project is not None:
        allowed.extend(project.api_keys)

    api_key = request.header(settings.MOCK_API_KEY_HEADER)
    if not api_key_matches(api_key, allowed):
        logger.log_auth_event(
            "mock_api_key",
            success=False,
            reason="missing key" if not api_key else "unknown key",
            endpoint_id=endpoint.id,
        )
        raise UnauthorizedError()


def resolve_status(endpoint: EndpointDefinition) -> int:
    """Validated numeric status for the endpoint's configured response status"""
    configured = endpoint.response_http_status
    try:
        status_code = int(str(configured).strip())
    except (TypeError, ValueError):
        status_code = None

    if status_code not in ALLOWED_STATUS_CODES:
        logger.error(
            f"[Mock] Endpoint {endpoint.id} has unsupported response status {configured!r}",
            extra={"event_type": "mock_misconfiguration", "endpoint_id": endpoint.id},
        )
        raise MisconfiguredStatusCodeError(configured, ALLOWED_STATUS_CODES)

    return status_code


async def apply_delay(endpoint: EndpointDefinition) -> None:
    """Wait for the endpoint's configured delay without blocking the event loop"""
    delay_ms = min(max(endpoint.delay or 0, 0), settings.MOCK_MAX_DELAY_MS)
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)
