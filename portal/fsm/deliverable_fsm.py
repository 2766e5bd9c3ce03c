# portal/fsm/deliverable_fsm.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from portal.models.approval import ApprovalStatus
from portal.models.deliverable import DeliverableStatus

"""Deliverable review FSM.

  DRAFT -> IN_REVIEW -> APPROVED
                     -> IN_REVIEW (changes requested)
  REJECTED -> IN_REVIEW (resubmitted)

- approve / request_changes are allowed from any status and always record an Approval row.
- Nothing leaves APPROVED except another review decision (no re-open action).
"""


class TransitionNotAllowed(Exception):
    pass


class ReviewAction(str, Enum):
    SUBMIT_FOR_REVIEW = "submit_for_review"  # draft/rejected -> in_review
    APPROVE = "approve"  # * -> approved
    REQUEST_CHANGES = "request_changes"  # * -> in_review


@dataclass(frozen=True)
class SideEffect:
    """Declarative side effects for the service layer to execute."""

    kind: str
    payload: dict[str, Any]


RECORD_APPROVAL = "record_approval"

ANY_STATUS = set(DeliverableStatus)


# action -> allowed from statuses + to status
TRANSITIONS: dict[ReviewAction, tuple[set[DeliverableStatus], DeliverableStatus]] = {
    ReviewAction.SUBMIT_FOR_REVIEW: (
        {DeliverableStatus.draft, DeliverableStatus.rejected},
        DeliverableStatus.in_review,
    ),
    ReviewAction.APPROVE: (ANY_STATUS, DeliverableStatus.approved),
    ReviewAction.REQUEST_CHANGES: (ANY_STATUS, DeliverableStatus.in_review),
}

# decision recorded alongside the status change
DECISIONS: dict[ReviewAction, ApprovalStatus] = {
    ReviewAction.APPROVE: ApprovalStatus.approved,
    ReviewAction.REQUEST_CHANGES: ApprovalStatus.changes_requested,
}


def apply_transition(
    current: DeliverableStatus | str,
    action_raw: ReviewAction | str,
) -> tuple[DeliverableStatus, list[SideEffect]]:
    """Returns (new_status, side_effects).

    Side effects are executed by the service layer in the same DB transaction.
    """

    if not isinstance(current, DeliverableStatus):
        current = DeliverableStatus(current)

    if isinstance(action_raw, ReviewAction):
        action = action_raw
    else:
        try:
            action = ReviewAction(action_raw.strip())
        except ValueError:
            allowed = ", ".join(a.value for a in ReviewAction)
            raise TransitionNotAllowed(f"Unknown action: '{action_raw}'. Allowed actions: {allowed}")

    allowed_from, to_status = TRANSITIONS[action]
    if current not in allowed_from:
        allowed_from_str = ", ".join(sorted(s.value for s in allowed_from))
        raise TransitionNotAllowed(
            f"Action '{action.value}' not allowed from status '{current.value}'. "
            f"Allowed from: {allowed_from_str}."
        )

    side_effects: list[SideEffect] = []

    decision = DECISIONS.get(action)
    if decision is not None:
        side_effects.append(SideEffect(kind=RECORD_APPROVAL, payload={"status": decision}))

    return to_status, side_effects
