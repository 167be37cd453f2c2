"""Vote state machine behind a review's usefulness score."""
import enum
import logging
from typing import Dict, NamedTuple, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filmorate_service.repos import ReviewRepository, UserRepository

logger = logging.getLogger(__name__)


class VoteAction(str, enum.Enum):
    ADD_LIKE = "add_like"
    ADD_DISLIKE = "add_dislike"
    REMOVE_LIKE = "remove_like"
    REMOVE_DISLIKE = "remove_dislike"


class VoteTransition(NamedTuple):
    new_vote: Optional[bool]
    delta: int


# (current vote, action) -> (new vote, change to useful)
# None = no vote, True = liked, False = disliked
TRANSITIONS: Dict[Tuple[Optional[bool], VoteAction], VoteTransition] = {
    (None, VoteAction.ADD_LIKE): VoteTransition(True, 1),
    (None, VoteAction.ADD_DISLIKE): VoteTransition(False, -1),
    (None, VoteAction.REMOVE_LIKE): VoteTransition(None, 0),
    (None, VoteAction.REMOVE_DISLIKE): VoteTransition(None, 0),
    (True, VoteAction.ADD_LIKE): VoteTransition(True, 0),
    (True, VoteAction.ADD_DISLIKE): VoteTransition(False, -2),
    (True, VoteAction.REMOVE_LIKE): VoteTransition(None, -1),
    (True, VoteAction.REMOVE_DISLIKE): VoteTransition(True, 0),
    (False, VoteAction.ADD_DISLIKE): VoteTransition(False, 0),
    (False, VoteAction.ADD_LIKE): VoteTransition(True, 2),
    (False, VoteAction.REMOVE_DISLIKE): VoteTransition(None, 1),
    (False, VoteAction.REMOVE_LIKE): VoteTransition(False, 0),
}


def transition(current: Optional[bool], action: VoteAction) -> VoteTransition:
    """Look up the next vote state and usefulness delta."""
    return TRANSITIONS[(current, VoteAction(action))]


class ReviewScoreEngine:
    """
    Applies vote transitions for one (review, user) pair at a time.

    The current vote is read under a row lock and the new vote row and the
    ``useful`` increment are committed together. A first vote has no row to
    lock, so losing that insert race re-runs the transition once against the
    winner's row.
    """

    def __init__(self, db: Session):
        self.db = db
        self.review_repo = ReviewRepository(db)
        self.user_repo = UserRepository(db)

    def vote(self, review_id: int, user_id: int, action: VoteAction) -> VoteTransition:
        """
        Apply a vote action.

        Args:
            review_id: Review being voted on
            user_id: Voter
            action: One of the VoteAction values

        Returns:
            The applied transition (delta 0 for no-ops)

        Raises:
            ReviewNotFound: if the review does not exist
            UserNotFound: if the user does not exist
        """
        action = VoteAction(action)
        self.review_repo.get_review_or_raise(review_id)
        self.user_repo.get_user_or_raise(user_id)

        try:
            return self._apply(review_id, user_id, action)
        except IntegrityError:
            logger.warning(
                f"Concurrent first vote on review {review_id} by user {user_id}, retrying"
            )
            return self._apply(review_id, user_id, action)

    def _apply(self, review_id: int, user_id: int, action: VoteAction) -> VoteTransition:
        current = self.review_repo.get_vote(review_id, user_id, for_update=True)
        result = transition(current, action)

        if result.new_vote == current and result.delta == 0:
            # Nothing to write; release the row lock
            self.db.rollback()
            logger.debug(f"Vote {action.value} on review {review_id} by user {user_id} is a no-op")
            return result

        self.review_repo.apply_vote(review_id, user_id, result.new_vote, result.delta)
        logger.info(
            f"Vote {action.value} on review {review_id} by user {user_id}: "
            f"useful {result.delta:+d}"
        )
        return result

    def add_like(self, review_id: int, user_id: int) -> VoteTransition:
        return self.vote(review_id, user_id, VoteAction.ADD_LIKE)

    def add_dislike(self, review_id: int, user_id: int) -> VoteTransition:
        return self.vote(review_id, user_id, VoteAction.ADD_DISLIKE)

    def remove_like(self, review_id: int, user_id: int) -> VoteTransition:
        return self.vote(review_id, user_id, VoteAction.REMOVE_LIKE)

    def remove_dislike(self, review_id: int, user_id: int) -> VoteTransition:
        return self.vote(review_id, user_id, VoteAction.REMOVE_DISLIKE)
