"""
Mock request pipeline: dispatch -> auth -> status -> delay -> generate -> assemble.

Every MockEngineError raised along the way is converted into an error
response here, so callers always get a MockResponse back.
"""
from typing import Iterable, Optional

from app.core.exceptions import MockEngineError
from app.core.logging_config import logger
from app.modules.mock_engine import assembler, dispatcher, template
from app.modules.mock_engine.types import (
    EndpointDefinition,
    MockRequest,
    MockResponse,
    ProjectDefinition,
)


def error_to_response(error: MockEngineError) -> MockResponse:
    return MockResponse(status_code=error.status_code, body=error.to_dict())


async def handle_mock_request(
    request: MockRequest,
    project: Optional[ProjectDefinition],
    endpoints: Iterable[EndpointDefinition],
) -> MockResponse:
    """Serve one mock request against a project's endpoint definitions"""
    endpoint_id = None
    try:
        found = dispatcher.dispatch(request.method, request.path, endpoints)
        endpoint = found.endpoint
        endpoint_id = endpoint.id

        dispatcher.authorize(endpoint, project, request)
        status_code = dispatcher.resolve_status(endpoint)

        if assembler.is_empty_response(request.method, status_code):
            await dispatcher.apply_delay(endpoint)
            response = assembler.assemble(endpoint, request.method, status_code, found.params, None)
        else:
            schema = template.parse_template(endpoint.schema_definition)
            await dispatcher.apply_delay(endpoint)

            if assembler.is_list_response(endpoint, request.method):
                generated = template.generate_many(schema, assembler.list_size(endpoint))
            else:
                generated = template.generate(schema)

            response = assembler.assemble(
                endpoint, request.method, status_code, found.params, generated, request.query
            )

    except MockEngineError as e:
        response = error_to_response(e)

    logger.log_mock_dispatch(request.method, request.path, endpoint_id, response.status_code)
    return response
