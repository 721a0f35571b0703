"""HTTP statuses a mock endpoint may be configured to answer with"""
from typing import Dict, FrozenSet

from app.modules.mock_engine.types import HttpMethod


METHOD_STATUS_CODES: Dict[HttpMethod, FrozenSet[int]] = {
    HttpMethod.GET: frozenset({200, 206, 400, 401, 403, 404, 500, 503}),
    HttpMethod.POST: frozenset({201, 202, 400, 401, 403, 409, 500}),
    HttpMethod.PUT: frozenset({200, 201, 204, 400, 401, 403, 404, 409, 500}),
    HttpMethod.PATCH: frozenset({200, 201, 204, 400, 401, 403, 404, 409, 500}),
    HttpMethod.DELETE: frozenset({200, 204, 400, 401, 403, 404, 500}),
}

ALLOWED_STATUS_CODES: FrozenSet[int] = frozenset().union(*METHOD_STATUS_CODES.values())


def is_valid_status_for_method(method: str, status_code: str) -> bool:
    try:
        return int(status_code) in METHOD_STATUS_CODES[HttpMethod(method.upper())]
    except (TypeError, ValueError, KeyError):
        return False


def default_status_for_method(method: str) -> str:
    """First success code of the method: 201 for POST, 200 otherwise"""
    return "201" if method.upper() == HttpMethod.POST.value else "200"
