from app.dependencies.auth import (
    get_current_recruiter,
    get_current_user,
    require_admin_key,
)

__all__ = [
    "get_current_user",
    "get_current_recruiter",
    "require_admin_key",
]
