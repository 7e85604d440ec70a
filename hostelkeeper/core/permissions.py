"""
Role and hostel scoping rules shared by services and routes.
"""

from typing import Optional

from sqlalchemy import or_

from hostelkeeper.models.enums import UserRole
from hostelkeeper.models.user import User

from .exceptions import AuthorizationError


def ensure_same_hostel(actor: User, target: User) -> None:
    """
    Wardens bound to a hostel may only act on users of that hostel.

    Administrators and unassigned wardens are unrestricted, and so are
    targets without a hostel yet.
    """
    if actor.role == UserRole.ADMIN:
        return
    if actor.assigned_hostel and target.assigned_hostel and actor.assigned_hostel != target.assigned_hostel:
        raise AuthorizationError(
            "Not authorized to act on students of another hostel",
            details={"actor_hostel": actor.assigned_hostel, "target_hostel": target.assigned_hostel},
        )


def ensure_can_decide_leave(approver: User, applicant: User) -> None:
    """Student leaves are decided by wardens or admins, warden leaves by admins only."""
    if applicant.role == UserRole.WARDEN and approver.role != UserRole.ADMIN:
        raise AuthorizationError("Only an administrator can decide a warden's leave")
    if approver.role not in (UserRole.WARDEN, UserRole.ADMIN):
        raise AuthorizationError("Only wardens and administrators can decide leave requests")
    ensure_same_hostel(approver, applicant)


def hostel_scope(actor: User) -> Optional[str]:
    """Hostel a listing is restricted to for ``actor``, or None for no restriction."""
    if actor.role == UserRole.WARDEN:
        return actor.assigned_hostel
    return None


def visible_in_hostel(hostel: Optional[str]):
    """
    Criterion on ``User`` matching the users ``ensure_same_hostel`` lets a
    warden of ``hostel`` act on.
    """
    return or_(User.assigned_hostel.is_(None), User.assigned_hostel == hostel)
