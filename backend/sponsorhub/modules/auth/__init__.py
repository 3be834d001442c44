from sponsorhub.modules.auth.dependencies import (
    get_current_user,
    get_optional_user,
    require_roles,
    get_current_organizer,
    get_current_sponsor,
    get_current_admin,
)

__all__ = [
    "get_current_user",
    "get_optional_user",
    "require_roles",
    "get_current_organizer",
    "get_current_sponsor",
    "get_current_admin",
]
