"""Role names and UX-level role guards.

These guards decide what a client offers. They are not security
enforcement: the workflow server authorizes every transition independently.
"""

from enum import Enum
from typing import Iterable, Optional


class UserRole(str, Enum):
    SOFTWARE_ADMIN = "SOFTWARE_ADMIN"
    ADMINISTRATION_ADMIN = "ADMINISTRATION_ADMIN"
    DEPARTMENT_ADMIN = "DEPARTMENT_ADMIN"
    SECTION_ADMIN = "SECTION_ADMIN"
    COMPLAINT_SUPERVISOR = "COMPLAINT_SUPERVISOR"
    WORKER = "WORKER"
    DIRECT_APPROVER = "DIRECT_APPROVER"


# DIRECT_APPROVER acts from the inbox too, limited to VIEW and DIRECT_APPROVE
# (see workflow.allowed_actions). Without it here that role could only view.
INBOX_ACTOR_ROLES = frozenset({
    UserRole.SOFTWARE_ADMIN,
    UserRole.ADMINISTRATION_ADMIN,
    UserRole.DEPARTMENT_ADMIN,
    UserRole.SECTION_ADMIN,
    UserRole.COMPLAINT_SUPERVISOR,
    UserRole.WORKER,
    UserRole.DIRECT_APPROVER,
})

# Follow-up action items: every inbox role except DIRECT_APPROVER
FOLLOW_UP_ROLES = frozenset({
    UserRole.SOFTWARE_ADMIN,
    UserRole.ADMINISTRATION_ADMIN,
    UserRole.DEPARTMENT_ADMIN,
    UserRole.SECTION_ADMIN,
    UserRole.COMPLAINT_SUPERVISOR,
    UserRole.WORKER,
})

# Incident-wide force close
FORCE_CLOSE_ROLES = frozenset({
    UserRole.SOFTWARE_ADMIN,
    UserRole.COMPLAINT_SUPERVISOR,
    UserRole.WORKER,
})


def _normalize(roles: Optional[Iterable[str]]) -> set:
    if not roles:
        return set()
    return {str(role).upper() for role in roles}


def can_act_on_inbox(roles: Optional[Iterable[str]]) -> bool:
    """Whether any of the roles may act (not just view) on inbox items."""
    return bool(_normalize(roles) & {role.value for role in INBOX_ACTOR_ROLES})


def can_force_close(roles: Optional[Iterable[str]]) -> bool:
    """Whether any of the roles may force-close a whole incident."""
    return bool(_normalize(roles) & {role.value for role in FORCE_CLOSE_ROLES})


def can_act_on_follow_up(roles: Optional[Iterable[str]]) -> bool:
    """Whether any of the roles may start, complete or delay action items."""
    return bool(_normalize(roles) & {role.value for role in FOLLOW_UP_ROLES})
