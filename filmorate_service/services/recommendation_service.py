"""Service for like-based film recommendations."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from filmorate_service.config import get_recommendation_neighbor_limit
from filmorate_service.ml import LikeMatrix
from filmorate_service.models import Film
from filmorate_service.repos import FilmRepository, LikeRepository, UserRepository

logger = logging.getLogger(__name__)


class RecommendationService:
    """
    User-user collaborative filtering over likes.

    The like matrix is reloaded from the database on every call; nothing is
    cached between requests.
    """

    def __init__(self, db: Session, neighbor_limit: Optional[int] = None):
        """
        Initialize the recommendation service.

        Args:
            db: Database session
            neighbor_limit: Number of most similar users to pool likes from
                (None = from config)
        """
        self.db = db
        self.neighbor_limit = (
            neighbor_limit if neighbor_limit is not None else get_recommendation_neighbor_limit()
        )
        self.user_repo = UserRepository(db)
        self.film_repo = FilmRepository(db)
        self.like_repo = LikeRepository(db)

    def get_recommendations(self, user_id: int) -> List[Film]:
        """
        Recommend films liked by the users most similar to ``user_id``.

        Returns an empty list when the user has no likes or shares no likes
        with anyone.

        Raises:
            UserNotFound: if the user does not exist
        """
        self.user_repo.get_user_or_raise(user_id)

        user_likes = self.like_repo.get_user_likes()
        if not user_likes.get(user_id):
            logger.debug(f"User {user_id} has no likes, nothing to recommend")
            return []

        matrix = LikeMatrix(user_likes)
        neighbors = matrix.nearest_neighbors(user_id, limit=self.neighbor_limit)
        if not neighbors:
            logger.debug(f"User {user_id} shares no likes with other users")
            return []

        film_ids = matrix.candidate_films(user_id, [neighbor_id for neighbor_id, _ in neighbors])
        logger.info(
            f"Recommending {len(film_ids)} films to user {user_id} "
            f"from {len(neighbors)} neighbors"
        )

        return self.film_repo.get_films_by_ids(film_ids)
