"""Service for reviews and review votes."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from filmorate_service.config import get_reviews_default_count
from filmorate_service.exceptions import ValidationError
from filmorate_service.models import EventType, Operation, Review
from filmorate_service.repos import FilmRepository, ReviewRepository, UserRepository
from filmorate_service.services.feed_service import FeedService
from filmorate_service.services.review_score_engine import ReviewScoreEngine, VoteTransition
from filmorate_service.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Review CRUD plus the like/dislike votes that drive ``useful``.

    Create, update and delete are logged to the author's feed in the same
    transaction as the write; votes are not logged.
    """

    def __init__(self, db: Session):
        self.db = db
        self.review_repo = ReviewRepository(db)
        self.user_repo = UserRepository(db)
        self.film_repo = FilmRepository(db)
        self.scores = ReviewScoreEngine(db)
        self.feed = FeedService(db)

    def create_review(self, review_data: dict) -> Review:
        """
        Create a review with ``useful`` = 0.

        Args:
            review_data: Dict with content, is_positive, user_id, film_id

        Raises:
            UserNotFound: if the author does not exist
            FilmNotFound: if the film does not exist
        """
        self.user_repo.get_user_or_raise(review_data["user_id"])
        self.film_repo.get_film_or_raise(review_data["film_id"])

        with atomic(self.db):
            review = self.review_repo.create_review(review_data, commit=False)
            self.feed.log(review.user_id, EventType.REVIEW, Operation.ADD, review.review_id, commit=False)

        logger.info(f"User {review.user_id} created review {review.review_id} of film {review.film_id}")
        return review

    def update_review(self, review_id: int, content: str, is_positive: bool) -> Review:
        """
        Update a review's content and positivity.

        Raises:
            ReviewNotFound: if the review does not exist
        """
        with atomic(self.db):
            review = self.review_repo.update_review(review_id, content, is_positive, commit=False)
            self.feed.log(review.user_id, EventType.REVIEW, Operation.UPDATE, review.review_id, commit=False)

        logger.info(f"Updated review {review_id}")
        return review

    def delete_review(self, review_id: int) -> None:
        """
        Delete a review and its votes.

        Raises:
            ReviewNotFound: if the review does not exist
        """
        review = self.review_repo.get_review_or_raise(review_id)
        author_id = review.user_id

        with atomic(self.db):
            self.review_repo.delete_review(review_id, commit=False)
            self.feed.log(author_id, EventType.REVIEW, Operation.REMOVE, review_id, commit=False)

        logger.info(f"Deleted review {review_id}")

    def get_review(self, review_id: int) -> Review:
        """
        Raises:
            ReviewNotFound: if the review does not exist
        """
        return self.review_repo.get_review_or_raise(review_id)

    def get_reviews(self, film_id: Optional[int] = None, count: Optional[int] = None) -> List[Review]:
        """
        Get the most useful reviews, optionally for one film.

        Raises:
            ValidationError: if count is not positive
            FilmNotFound: if film_id is given and the film does not exist
        """
        if count is None:
            count = get_reviews_default_count()
        if count <= 0:
            raise ValidationError("count must be positive")

        if film_id is not None:
            self.film_repo.get_film_or_raise(film_id)

        return self.review_repo.get_reviews(film_id=film_id, count=count)

    def add_like(self, review_id: int, user_id: int) -> VoteTransition:
        return self.scores.add_like(review_id, user_id)

    def add_dislike(self, review_id: int, user_id: int) -> VoteTransition:
        return self.scores.add_dislike(review_id, user_id)

    def remove_like(self, review_id: int, user_id: int) -> VoteTransition:
        return self.scores.remove_like(review_id, user_id)

    def remove_dislike(self, review_id: int, user_id: int) -> VoteTransition:
        return self.scores.remove_dislike(review_id, user_id)
