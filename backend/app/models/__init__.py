# Re-export all models for convenient imports
from app.models.project import Project, DEFAULT_SCHEMA, DEFAULT_COUNT
from app.models.endpoint import Endpoint

__all__ = [
    "Project",
    "Endpoint",
    "DEFAULT_SCHEMA",
    "DEFAULT_COUNT",
]
