"""Request actor contract shared by every context's API.

Sign-in is handled upstream; by the time a request reaches this service the
auth layer has resolved the caller and forwarded it as two headers:

    X-User-Id:   the caller's user id
    X-User-Role: Customer | Professional | Admin | Super_Admin

Routes declare the actor they need with ``Depends(current_actor)`` or
``Depends(require_roles(...))``.
"""

from dataclasses import dataclass
from enum import Enum

from fastapi import Depends, Header, HTTPException


class Role(Enum):
    CUSTOMER = "Customer"
    PROFESSIONAL = "Professional"
    ADMIN = "Admin"
    SUPER_ADMIN = "Super_Admin"


ADMIN_ROLES = (Role.ADMIN.value, Role.SUPER_ADMIN.value)

_KNOWN_ROLES = {role.value for role in Role}


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a request."""

    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_professional(self) -> bool:
        return self.role == Role.PROFESSIONAL.value


def current_actor(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default=Role.CUSTOMER.value),
) -> Actor:
    """Resolve the caller from the forwarded auth headers."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    if x_user_role not in _KNOWN_ROLES:
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}")
    return Actor(user_id=x_user_id, role=x_user_role)


def require_roles(*roles: str):
    """Build a dependency that admits only callers holding one of ``roles``."""

    def _dependency(actor: Actor = Depends(current_actor)) -> Actor:
        if actor.role not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return actor

    return _dependency
