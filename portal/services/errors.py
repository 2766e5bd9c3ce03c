# portal/services/errors.py
from __future__ import annotations


class ReviewError(Exception):
    """Base for review workflow errors the API layer translates to 4xx."""
    pass


class NotFound(ReviewError):
    pass


class InvalidReviewInput(ReviewError):
    pass


class VersionConflict(ReviewError):
    """Version number still contended after all retries."""
    pass
