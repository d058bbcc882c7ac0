"""
Acting-user resolution.

Real authentication is the host's concern and is not implemented here: the
caller names the acting user in the `X-User-Id` header and the user is looked
up in the catalog.

Provides:
- get_current_user: any known user
- get_current_student: student-only routes
"""

from fastapi import Depends, Header, HTTPException, status

from app.db.catalog import InMemoryCatalog, get_catalog
from app.models.domain import User, UserRole


async def get_current_user(
    x_user_id: str = Header(None),
    catalog: InMemoryCatalog = Depends(get_catalog)
) -> User:
    """
    FastAPI dependency - Get the acting user.

    Usage:
        @router.get("/protected")
        async def route(user: User = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing or unknown X-User-Id header",
    )

    if not x_user_id:
        raise credentials_exception

    user = catalog.get_user(x_user_id)
    if user is None:
        raise credentials_exception

    return user


def require_role(role: UserRole, detail: str):
    """Build a dependency that only lets one role through."""
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role != role:
            raise HTTPException(status_code=403, detail=detail)
        return user
    return dependency


get_current_student = require_role(UserRole.student, "Students only")
