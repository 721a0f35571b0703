"""Response shaping: list envelopes, pagination, path-parameter echo, empty bodies"""
from typing import Any, Dict, List, Mapping, Optional

from app.core.config import settings
from app.modules.mock_engine.types import (
    EndpointDefinition,
    HttpMethod,
    MockResponse,
    ResponseType,
)
from app.utils.pagination import paginate_items


NO_CONTENT = 204


def list_size(endpoint: EndpointDefinition, hard_cap: Optional[int] = None) -> int:
    """Number of items a list response carries: min(count, hard cap), never negative"""
    cap = hard_cap if hard_cap is not None else settings.MOCK_LIST_HARD_CAP
    return max(0, min(endpoint.count, cap))


def is_list_response(endpoint: EndpointDefinition, method: str) -> bool:
    """Only GET requests against list endpoints return collections"""
    return method.upper() == HttpMethod.GET.value and endpoint.response_type == ResponseType.LIST


def is_empty_response(method: str, status_code: int) -> bool:
    return method.upper() == HttpMethod.DELETE.value or status_code == NO_CONTENT


def _parse_positive_int(value: Any, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def build_list_body(
    endpoint: EndpointDefinition,
    items: List[Any],
    query: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """``{"data": [...]}``, sliced and annotated when the endpoint supports pagination"""
    if not endpoint.support_pagination:
        return {"data": items}

    query = query or {}
    page = _parse_positive_int(query.get("page"), 1)
    limit = min(
        _parse_positive_int(query.get("limit"), settings.MOCK_DEFAULT_PAGE_LIMIT),
        settings.MOCK_LIST_HARD_CAP,
    )
    page_items, pagination = paginate_items(items, page, limit)
    return {"data": page_items, "pagination": pagination}


def build_single_body(generated: Any, params: Mapping[str, str]) -> Any:
    """Generated object with bound path parameters merged in (params win)"""
    if isinstance(generated, dict) and params:
        return {**generated, **params}
    return generated


def assemble(
    endpoint: EndpointDefinition,
    method: str,
    status_code: int,
    params: Mapping[str, str],
    generated: Any,
    query: Optional[Mapping[str, str]] = None,
) -> MockResponse:
    """
    Fold generated data, path parameters and response-shape rules into the
    final response. ``generated`` is a list for list responses and a single
    value otherwise. ``status_code`` has already been validated.
    """
    if is_empty_response(method, status_code):
        return MockResponse(status_code=status_code, body=None, endpoint_id=endpoint.id)

    if is_list_response(endpoint, method):
        items = list(generated)[:list_size(endpoint)]
        body = build_list_body(endpoint, items, query)
    else:
        body = build_single_body(generated, params)

    return MockResponse(status_code=status_code, body=body, endpoint_id=endpoint.id)
