"""Decide which actions a case row offers.

The server-declared allowed_actions list is already scoped to what is legal
for the subcase right now. This filter only narrows it: bulk-capable roles
are restricted to viewing and one-step direct approval. It never widens the
server set and performs no authorization reasoning of its own.
"""

import logging
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from case_workflow_lib.config import get_settings
from case_workflow_lib.models.actions import ActionKind, CaseAction
from case_workflow_lib.models.subcase import Subcase

logger = logging.getLogger(__name__)

BULK_ROLE_ACTIONS: FrozenSet[CaseAction] = frozenset({CaseAction.VIEW, CaseAction.DIRECT_APPROVE})

# Inbox endpoints also use short lowercase verbs
_ALIASES: Dict[str, CaseAction] = {
    "view": CaseAction.VIEW,
    "accept": CaseAction.APPROVE,
    "reject": CaseAction.REJECT,
}

_missing = [kind.value for kind in ActionKind if kind.value not in CaseAction.__members__]
if _missing:
    raise RuntimeError(f"CaseAction has no entry for: {', '.join(_missing)}")


def parse_action(raw: str) -> Optional[CaseAction]:
    """Resolve a server action string, or None when it is not recognised.

    Accepts wire codes ("DIRECT_APPROVE"), their lowercase form and the inbox
    aliases "view", "accept" and "reject".
    """
    if not isinstance(raw, str):
        return None
    key = raw.strip()
    if key.lower() in _ALIASES:
        return _ALIASES[key.lower()]
    try:
        return CaseAction(key.upper())
    except ValueError:
        return None


def parse_actions(raw_actions: Iterable[str]) -> Tuple[CaseAction, ...]:
    """Parse a server action list into an ordered, de-duplicated tuple.

    Unknown entries are dropped so that a server-side action kind not yet
    wired into this library never breaks a view.
    """
    actions = []
    for raw in raw_actions:
        action = parse_action(raw)
        if action is None:
            logger.debug(f"Dropping unrecognised server action: {raw!r}")
            continue
        if action not in actions:
            actions.append(action)
    return tuple(actions)


def is_bulk_capable(active_role: Optional[str], bulk_capable_roles: Optional[Iterable[str]] = None) -> bool:
    """Whether active_role is one of the bulk-capable roles."""
    if not active_role:
        return False
    if bulk_capable_roles is None:
        bulk_capable_roles = get_settings().bulk_capable_roles
    return active_role.upper() in {role.upper() for role in bulk_capable_roles}


def visible_actions(
    subcase: Subcase,
    active_role: Optional[str],
    bulk_capable_roles: Optional[Iterable[str]] = None,
) -> Tuple[CaseAction, ...]:
    """Actions to offer for a subcase under the caller's active role.

    Args:
        subcase: Row snapshot carrying the server-declared allowed_actions
        active_role: Role the user is currently acting as
        bulk_capable_roles: Roles narrowed to VIEW and DIRECT_APPROVE
            (default: configured WORKFLOW_BULK_CAPABLE_ROLES)

    Returns:
        Ordered tuple of CaseAction, always a subset of the server set
    """
    actions = parse_actions(subcase.allowed_actions)
    if is_bulk_capable(active_role, bulk_capable_roles):
        return tuple(action for action in actions if action in BULK_ROLE_ACTIONS)
    return actions
