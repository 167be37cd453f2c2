"""Service for film likes."""
import logging

from sqlalchemy.orm import Session

from filmorate_service.models import EventType, Operation
from filmorate_service.repos import FilmRepository, LikeRepository, UserRepository
from filmorate_service.services.feed_service import FeedService
from filmorate_service.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class LikeService:
    """
    Adds and removes likes.

    Both operations are idempotent. A feed event is written only when the
    like edge set actually changes, in the same transaction as the change.
    """

    def __init__(self, db: Session):
        self.db = db
        self.film_repo = FilmRepository(db)
        self.user_repo = UserRepository(db)
        self.like_repo = LikeRepository(db)
        self.feed = FeedService(db)

    def add_like(self, film_id: int, user_id: int) -> bool:
        """
        Like a film.

        Returns:
            True if the like was new

        Raises:
            FilmNotFound: if the film does not exist
            UserNotFound: if the user does not exist
        """
        self.film_repo.get_film_or_raise(film_id)
        self.user_repo.get_user_or_raise(user_id)

        with atomic(self.db):
            created = self.like_repo.add_like(film_id, user_id, commit=False)
            if created:
                self.feed.log(user_id, EventType.LIKE, Operation.ADD, film_id, commit=False)

        if created:
            logger.info(f"User {user_id} liked film {film_id}")
        return created

    def remove_like(self, film_id: int, user_id: int) -> bool:
        """
        Remove a like.

        Returns:
            True if a like was removed

        Raises:
            FilmNotFound: if the film does not exist
            UserNotFound: if the user does not exist
        """
        self.film_repo.get_film_or_raise(film_id)
        self.user_repo.get_user_or_raise(user_id)

        with atomic(self.db):
            removed = self.like_repo.remove_like(film_id, user_id, commit=False)
            if removed:
                self.feed.log(user_id, EventType.LIKE, Operation.REMOVE, film_id, commit=False)

        if removed:
            logger.info(f"User {user_id} removed like from film {film_id}")
        else:
            logger.debug(f"User {user_id} did not like film {film_id}")
        return removed
