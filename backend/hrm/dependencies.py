# backend/hrm/dependencies.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header
from jose import JWTError

from . import security
from .errors import Forbidden, Unauthorized


@dataclass(frozen=True)
class SessionContext:
    """The authenticated caller, resolved once per request from the bearer token."""

    user_id: int
    email: str
    role: str
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role.lower() == "admin"


def get_current_session(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> SessionContext:
    """Parse the Bearer token from the Authorization header into a SessionContext.

    The token is self-contained (issued by /api/user/login), so no database round trip is needed.
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise Unauthorized("No token provided")
    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = security.decode_access_token(token)
    except JWTError:
        raise Unauthorized("Invalid token")

    email = payload.get("sub")
    user_id = payload.get("userId")
    if email is None or user_id is None:
        raise Unauthorized("Invalid token")
    return SessionContext(
        user_id=int(user_id),
        email=email,
        role=payload.get("role") or "",
        name=(payload.get("name") or "").strip(),
    )


def require_admin(session: SessionContext = Depends(get_current_session)) -> SessionContext:
    if not session.is_admin:
        raise Forbidden("Only admins can manage users")
    return session
