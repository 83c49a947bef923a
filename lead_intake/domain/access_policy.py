"""Ownership-based access policy for buyer records and user administration.

Every function here is pure: it looks only at the principal and the record
and never touches storage. Services call these on every operation with the
principal resolved for the current request.

Reads of a single record are open to any authenticated principal, while
listings and exports are narrowed to the principal's own records unless the
principal is an admin.
"""

from lead_intake.domain.entities import Buyer, Principal, UserRole
from lead_intake.domain.exceptions import ForbiddenError, ValidationFailedError

NOT_OWNER_REASON = "Not authorized - not owner"
ADMIN_REQUIRED_REASON = "Admin access required"


def can_read(principal: Principal, buyer: Buyer) -> bool:
    return True


def can_create(principal: Principal) -> bool:
    return True


def can_write(principal: Principal, buyer: Buyer) -> bool:
    return principal.is_admin or buyer.owner_id == principal.id


def can_delete(principal: Principal, buyer: Buyer) -> bool:
    return principal.is_admin or buyer.owner_id == principal.id


def list_scope_owner_id(principal: Principal) -> str | None:
    """Owner id that listings must be restricted to, or None for no restriction."""
    return None if principal.is_admin else principal.id


def export_scope_label(principal: Principal) -> str:
    return "admin-all" if principal.is_admin else "user-owned"


def authorize_write(principal: Principal, buyer: Buyer) -> None:
    if not can_write(principal, buyer):
        raise ForbiddenError(NOT_OWNER_REASON)


def authorize_delete(principal: Principal, buyer: Buyer) -> None:
    if not can_delete(principal, buyer):
        raise ForbiddenError(NOT_OWNER_REASON)


# ── User administration ─────────────────────────────────────────────


def ensure_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise ForbiddenError(ADMIN_REQUIRED_REASON)


def ensure_can_change_role(
    principal: Principal, target_user_id: str, new_role: UserRole | None
) -> None:
    """Admins may not change their own role."""
    ensure_admin(principal)
    if new_role is not None and target_user_id == principal.id:
        raise ValidationFailedError.single("role", "Cannot change your own role")


def ensure_can_delete_user(principal: Principal, target_user_id: str) -> None:
    """Admins may not delete their own account."""
    ensure_admin(principal)
    if target_user_id == principal.id:
        raise ValidationFailedError.single("id", "Cannot delete your own account")
