"""Column types and identifier helpers shared by models and services"""
from sqlalchemy import TypeDecorator, String
import uuid


def generate_uuid() -> str:
    """Generate a UUID string for primary keys"""
    return str(uuid.uuid4())


def is_valid_uuid(value: str) -> bool:
    """True when ``value`` parses as a UUID (identifier format check)"""
    try:
        uuid.UUID(str(value))
    except (ValueError, AttributeError, TypeError):
        return False
    return True


class GUID(TypeDecorator):
    """UUID stored as VARCHAR(36) on every backend, surfaced as ``str``"""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            return str(value)
        return value
