from sponsorhub.core.exceptions import InvalidIdError
from sponsorhub.core.types import is_valid_uuid


def ensure_valid_id(value: str, resource_type: str) -> str:
    """Return the normalized id or raise 400 'Invalid <resource> ID'"""
    if not is_valid_uuid(value):
        raise InvalidIdError(resource_type)
    return str(value).lower()
