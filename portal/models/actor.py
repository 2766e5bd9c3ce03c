# portal/models/actor.py
from __future__ import annotations

import enum
from dataclasses import dataclass
from uuid import UUID


class ActorKind(str, enum.Enum):
    """Which identity space an author/approver id belongs to."""

    user = "USER"  # internal staff (users table)
    client = "CLIENT"  # external client (clients table)


@dataclass(frozen=True)
class ActorRef:
    """Tagged identity stored as (kind, id) column pairs. Resolved once from the session."""

    kind: ActorKind
    id: UUID
