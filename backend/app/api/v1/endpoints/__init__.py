# API endpoints
from . import projects, endpoints, mock, health

__all__ = ["projects", "endpoints", "mock", "health"]
