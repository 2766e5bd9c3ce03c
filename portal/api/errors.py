# portal/api/errors.py
from __future__ import annotations

from fastapi import HTTPException, status

from portal.fsm.deliverable_fsm import TransitionNotAllowed
from portal.services.errors import InvalidReviewInput, NotFound, ReviewError, VersionConflict


def to_http(e: ReviewError | TransitionNotAllowed) -> HTTPException:
    """Service/FSM error -> HTTP status. Message is safe to show to the caller."""
    if isinstance(e, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, InvalidReviewInput):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if isinstance(e, VersionConflict):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if isinstance(e, TransitionNotAllowed):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
