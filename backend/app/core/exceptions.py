"""
Custom Exceptions for the Dynamic REST API
==========================================

Two families live here:

* ``AppError`` - management API failures (projects, endpoints). Rendered by
  the global handler as ``{"success": false, "error": {code, message, details}}``.
* ``MockEngineError`` - failures while serving mock traffic. Each subclass is
  one error kind; the engine turns them into ``{"error": kind, "message": ...}``
  with the kind's HTTP status. They never escape a mock request.

Usage:
    from app.core.exceptions import ProjectNotFoundError

    if not project:
        raise ProjectNotFoundError(project_id)
"""

from typing import Optional, Any, Dict


class AppError(Exception):
    """Base exception for management API errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(AppError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found with id of '{resource_id}'",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class ProjectNotFoundError(ResourceNotFoundError):
    """Project not found"""

    def __init__(self, project_id: str):
        super().__init__("Project", project_id)


class EndpointNotFoundError(ResourceNotFoundError):
    """Endpoint not found"""

    def __init__(self, endpoint_id: str):
        super().__init__("Endpoint", endpoint_id)


class ApiKeyNotFoundError(ResourceNotFoundError):
    """API key is not registered on the project"""

    def __init__(self, project_id: str):
        super().__init__("ApiKey", project_id)
        self.message = "API key not found on this project"


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(AppError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class DuplicateEndpointError(AppError):
    """An endpoint with the same path, method and response type exists"""

    status_code = 409

    def __init__(self, path: str, method: str, response_type: str):
        super().__init__(
            f"An endpoint with path '{path}', method '{method}', and response type "
            f"'{response_type}' already exists in this project",
            code="DUPLICATE_ENDPOINT",
            details={"path": path, "method": method, "response_type": response_type}
        )


# ============================================
# Mock engine errors
# ============================================

class MockEngineError(Exception):
    """Base class for mock request failures; ``kind`` is the wire error name"""

    kind: str = "InternalError"
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "message": self.message}


class InvalidProjectReferenceError(MockEngineError):
    """Project identifier does not resolve"""

    kind = "InvalidProjectReference"
    status_code = 404

    def __init__(self, project_id: str):
        super().__init__(f"Project '{project_id}' does not exist")
        self.project_id = project_id


class NoMatchingEndpointError(MockEngineError):
    """No endpoint definition matches method + path"""

    kind = "NoMatchingEndpoint"
    status_code = 404

    def __init__(self, method: str, path: str):
        super().__init__(f"No endpoint found for {method} {path}")
        self.method = method
        self.path = path


class UnauthorizedError(MockEngineError):
    """Auth is required but the API key is missing or unknown"""

    kind = "Unauthorized"
    status_code = 401

    def __init__(self, message: str = "Invalid or missing API key"):
        super().__init__(message)


class InvalidSchemaDefinitionError(MockEngineError):
    """Stored schema cannot be interpreted as a template"""

    kind = "InvalidSchemaDefinition"
    status_code = 500

    def __init__(self, reason: str):
        super().__init__(f"Endpoint schema definition is invalid: {reason}")


class MisconfiguredStatusCodeError(MockEngineError):
    """Stored response status is outside the supported set"""

    kind = "MisconfiguredStatusCode"
    status_code = 500

    def __init__(self, configured: Any, allowed):
        super().__init__(
            f"Endpoint is configured with unsupported response status '{configured}'. "
            f"Supported: {', '.join(str(code) for code in sorted(allowed))}"
        )
        self.configured = configured


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: AppError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict()
    }
