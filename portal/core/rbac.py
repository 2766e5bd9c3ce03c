# portal/core/rbac.py
from __future__ import annotations

import enum
from typing import Mapping, Set


class Forbidden(Exception):
    """Raised when actor role is not allowed for an operation."""
    pass


class Role(str, enum.Enum):
    admin = "ADMIN"
    editor = "EDITOR"
    client = "CLIENT"


STAFF: Set[str] = {Role.admin.value, Role.editor.value}
EVERYONE: Set[str] = STAFF | {Role.client.value}


# Review actions are open to every authenticated actor (clients review their own work);
# managing deliverables themselves is staff-only.
ALLOW: Mapping[str, Set[str]] = {
    # ---- Deliverables ----
    "deliverable.create": STAFF,
    "deliverable.submit_for_review": STAFF,

    # ---- Review ----
    "deliverable.version.create": EVERYONE,
    "deliverable.annotation.write": EVERYONE,
    "deliverable.comment.write": EVERYONE,
    "deliverable.decision": EVERYONE,
}


def is_staff(role: str) -> bool:
    return role in STAFF


def ensure_allowed(permission: str, role: str) -> None:
    allowed = ALLOW.get(permission, set())
    if role not in allowed:
        raise Forbidden(f"Role '{role}' is not allowed for '{permission}'")
