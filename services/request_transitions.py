"""
Join request state machine.

Pure transition table for JoinRequest.status, independent of storage so the
routes only decide *what* happened and persist the resulting state.

    (none)    --submit-->  pending
    rejected  --submit-->  pending
    accepted  --submit-->  pending     (only when no longer a participant)
    pending   --accept-->  accepted
    pending   --reject-->  rejected
"""
import enum
from typing import Optional

from models.JoinRequest import JoinRequestStatus


class JoinEvent(enum.Enum):
    SUBMIT = "submit"
    ACCEPT = "accept"
    REJECT = "reject"


class TransitionError(Exception):
    """Event is not allowed from the current status."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


_DECISIONS = {
    JoinEvent.ACCEPT: JoinRequestStatus.ACCEPTED,
    JoinEvent.REJECT: JoinRequestStatus.REJECTED,
}


def event_for_decision(decision: str) -> JoinEvent:
    """Map the wire value of a decision ("accepted" / "rejected") to its event."""
    if decision == JoinRequestStatus.ACCEPTED.value:
        return JoinEvent.ACCEPT
    if decision == JoinRequestStatus.REJECTED.value:
        return JoinEvent.REJECT
    raise TransitionError("Invalid status")


def next_status(
    current: Optional[JoinRequestStatus],
    event: JoinEvent,
    *,
    is_participant: bool = False,
) -> JoinRequestStatus:
    """Return the status a request moves to, or raise TransitionError.

    `current` is None when no request exists yet for the (trip, user) pair.
    `is_participant` tells whether the requester is listed on the trip right
    now; it only matters for resubmitting an accepted request.
    """
    if event is JoinEvent.SUBMIT:
        if current is None or current is JoinRequestStatus.REJECTED:
            return JoinRequestStatus.PENDING
        if current is JoinRequestStatus.PENDING:
            raise TransitionError("Request already pending")
        # accepted: stale if the user was removed or left since
        if is_participant:
            raise TransitionError("You are already a member of this trip")
        return JoinRequestStatus.PENDING

    if current is not JoinRequestStatus.PENDING:
        raise TransitionError("Request already processed")
    return _DECISIONS[event]
