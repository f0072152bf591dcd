"""Mentor review lifecycle of a trade.

    SUBMITTED --submit_review--> REVIEWED (terminal)
    SUBMITTED --request_revision--> REVISION_REQUESTED --resubmit--> SUBMITTED

The state is derived from the stored ``is_reviewed`` flag and ``status``
column; the transition functions below are the only code that writes them.
Every guard runs before the trade is touched, so a rejected transition
leaves the row exactly as it was.
"""
import logging
from datetime import datetime
from enum import Enum

from .enums import ReviewStatus
from .errors import AuthorizationError, InvalidTransitionError, ValidationError
from .validation import clean_trade_fields

logger = logging.getLogger(__name__)

DEFAULT_REVISION_NOTE = 'Revision requested by mentor'
SCORE_RANGE = range(1, 6)


class ReviewState(Enum):
    SUBMITTED = 'submitted'
    REVISION_REQUESTED = 'revision_requested'
    REVIEWED = 'reviewed'


def review_state(trade) -> ReviewState:
    if trade.is_reviewed:
        return ReviewState.REVIEWED
    if trade.status == ReviewStatus.REVISION.value:
        return ReviewState.REVISION_REQUESTED
    return ReviewState.SUBMITTED


def _check_reviewer(trade, actor):
    if not actor.is_mentor:
        raise AuthorizationError("Only mentors can review trades")
    if actor.owns(trade):
        raise AuthorizationError("Mentors cannot review their own trades")


def _check_open(trade, action):
    state = review_state(trade)
    if state is not ReviewState.SUBMITTED:
        raise InvalidTransitionError(f"Cannot {action} a trade in state {state.value}")


def _parse_score(score):
    if isinstance(score, bool) or (isinstance(score, float) and not score.is_integer()):
        score = None
    try:
        score = int(score) if score is not None and str(score).strip() else None
    except (TypeError, ValueError):
        score = None
    if score not in SCORE_RANGE:
        raise ValidationError("A score between 1 and 5 is required", field='score')
    return score


def submit_review(trade, actor, score, notes=None, now=None):
    """Approve a submitted trade with a 1-5 score."""
    _check_reviewer(trade, actor)
    _check_open(trade, 'review')
    score = _parse_score(score)

    trade.mentor_score = score
    trade.mentor_notes = notes
    trade.is_reviewed = True
    trade.status = ReviewStatus.SUBMITTED.value
    trade.reviewed_by = actor.id
    trade.reviewed_at = now or datetime.utcnow()

    logger.info("Trade %s reviewed by %s with score %s", trade.id, actor.id, score)
    return trade


def request_revision(trade, actor, notes=None, now=None):
    """Send a submitted trade back to its owner for corrections."""
    _check_reviewer(trade, actor)
    _check_open(trade, 'request a revision for')

    trade.status = ReviewStatus.REVISION.value
    trade.is_reviewed = False
    trade.mentor_notes = notes or DEFAULT_REVISION_NOTE
    trade.reviewed_by = actor.id
    trade.reviewed_at = now or datetime.utcnow()

    logger.info("Revision requested on trade %s by %s", trade.id, actor.id)
    return trade


def resubmit(trade, actor, fields):
    """Apply the owner's edits and put the trade back in the review queue.

    Previous mentor notes stay on the row until the next review replaces them.
    """
    if not actor.owns(trade):
        raise AuthorizationError("Only the owner can edit this trade")
    if review_state(trade) is ReviewState.REVIEWED:
        raise InvalidTransitionError("Reviewed trades can no longer be edited")

    changes = clean_trade_fields(fields, current=trade)
    for name, value in changes.items():
        setattr(trade, name, value)
    trade.status = ReviewStatus.SUBMITTED.value

    logger.info("Trade %s resubmitted by owner %s (%s)", trade.id, actor.id, ', '.join(sorted(changes)) or 'no changes')
    return trade
