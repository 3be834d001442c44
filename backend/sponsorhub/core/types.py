"""Custom SQLAlchemy types shared by all models"""
from sqlalchemy import TypeDecorator, String
import uuid


def generate_uuid():
    """Generate a UUID string"""
    return str(uuid.uuid4())


def is_valid_uuid(value) -> bool:
    """Check whether a path/body value is a well-formed UUID"""
    try:
        uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return False
    return True


class GUID(TypeDecorator):
    """Stores UUIDs as VARCHAR(36) on every backend (SQLite and PostgreSQL)"""
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if isinstance(value, uuid.UUID):
            return str(value)
        return str(value).lower()

    def process_result_value(self, value, dialect):
        if value is not None:
            return str(value)
        return value
