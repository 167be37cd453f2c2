"""Repository for reviews and review votes."""

import logging
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from filmorate_service.exceptions import ReviewNotFound
from filmorate_service.models import Review, ReviewVote

logger = logging.getLogger(__name__)


class ReviewRepository:
    """
    Repository for reviews and the (review, user) vote rows behind ``useful``.
    """

    def __init__(self, db: Session):
        self.db = db

    def _save(self, review: Review, commit: bool) -> None:
        if commit:
            self.db.commit()
            self.db.refresh(review)
        else:
            self.db.flush()

    def create_review(self, review_data: dict, commit: bool = True) -> Review:
        """
        Store a new review with a zero usefulness score.

        Args:
            review_data: Dict with content, is_positive, user_id, film_id
            commit: Commit immediately (False = only flush into the open transaction)

        Returns:
            Created Review
        """
        review = Review(
            content=review_data["content"],
            is_positive=review_data["is_positive"],
            user_id=review_data["user_id"],
            film_id=review_data["film_id"],
            useful=0,
        )
        self.db.add(review)
        self._save(review, commit)

        return review

    def update_review(
            self,
            review_id: int,
            content: str,
            is_positive: bool,
            commit: bool = True
    ) -> Review:
        """
        Update review text and positivity. Never touches ``useful``.

        Raises:
            ReviewNotFound: if the review does not exist
        """
        review = self.get_review_or_raise(review_id)
        review.content = content  # type: ignore[assignment]
        review.is_positive = is_positive  # type: ignore[assignment]
        self._save(review, commit)

        return review

    def delete_review(self, review_id: int, commit: bool = True) -> bool:
        """
        Delete a review together with its votes.

        Returns:
            True if deleted, False if not found
        """
        self.db.query(ReviewVote).filter(ReviewVote.review_id == review_id).delete()
        count = self.db.query(Review).filter(Review.review_id == review_id).delete()
        if commit:
            self.db.commit()

        return count > 0

    def get_review(self, review_id: int) -> Optional[Review]:
        """Get review by ID."""
        return self.db.query(Review).filter(Review.review_id == review_id).first()

    def get_review_or_raise(self, review_id: int) -> Review:
        """Get review by ID, raising ReviewNotFound when absent."""
        review = self.get_review(review_id)
        if review is None:
            raise ReviewNotFound(review_id)
        return review

    # noinspection PyTypeChecker
    def get_reviews(self, film_id: Optional[int] = None, count: int = 10) -> List[Review]:
        """
        Get the most useful reviews.

        Args:
            film_id: If provided, only reviews of this film
            count: Maximum number of reviews

        Returns:
            Reviews ordered by usefulness descending
        """
        query = self.db.query(Review)

        if film_id is not None:
            query = query.filter(Review.film_id == film_id)

        return (
            query.order_by(desc(Review.useful), Review.review_id)
            .limit(count)
            .all()
        )

    def get_vote(self, review_id: int, user_id: int, for_update: bool = False) -> Optional[bool]:
        """
        Get a user's current vote on a review.

        Args:
            review_id: Review ID
            user_id: Voter ID
            for_update: Lock the vote row until the transaction ends

        Returns:
            True for a like, False for a dislike, None when there is no vote
        """
        query = self.db.query(ReviewVote).filter(
            ReviewVote.review_id == review_id,
            ReviewVote.user_id == user_id,
        )
        if for_update:
            query = query.with_for_update()

        vote = query.first()
        return None if vote is None else bool(vote.is_like)

    def apply_vote(
            self,
            review_id: int,
            user_id: int,
            new_vote: Optional[bool],
            delta: int
    ) -> None:
        """
        Write a vote row and shift the usefulness counter in one commit.

        Args:
            review_id: Review ID
            user_id: Voter ID
            new_vote: Vote to store (None deletes the row)
            delta: Amount added to ``useful``
        """
        vote = (
            self.db.query(ReviewVote)
            .filter(ReviewVote.review_id == review_id, ReviewVote.user_id == user_id)
            .first()
        )

        if new_vote is None:
            if vote is not None:
                self.db.delete(vote)
        elif vote is not None:
            vote.is_like = new_vote  # type: ignore[assignment]
        else:
            self.db.add(ReviewVote(review_id=review_id, user_id=user_id, is_like=new_vote))

        if delta:
            (
                self.db.query(Review)
                .filter(Review.review_id == review_id)
                .update({Review.useful: Review.useful + delta}, synchronize_session=False)
            )

        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(f"Failed to apply vote on review {review_id} by user {user_id}")
            raise

