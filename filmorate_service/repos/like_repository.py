"""Repository for film likes."""

import logging
from collections import defaultdict
from typing import Dict, Set

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filmorate_service.models import Like

logger = logging.getLogger(__name__)


class LikeRepository:
    """
    Repository for the like edge set.

    The per-user like index is never stored separately; it is projected from
    the ``likes`` table on every read.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_like(self, film_id: int, user_id: int, commit: bool = True) -> bool:
        """
        Insert a like edge.

        Args:
            film_id: Liked film
            user_id: User who likes it
            commit: Commit immediately (False = only flush into the open transaction)

        Returns:
            True if a row was inserted, False if the like already existed
        """
        existing = (
            self.db.query(Like)
            .filter(Like.film_id == film_id, Like.user_id == user_id)
            .first()
        )
        if existing:
            logger.debug(f"Like from user {user_id} on film {film_id} already exists")
            return False

        self.db.add(Like(film_id=film_id, user_id=user_id))
        try:
            if commit:
                self.db.commit()
            else:
                self.db.flush()
        except IntegrityError:
            # A concurrent request inserted the same pair first
            self.db.rollback()
            logger.debug(f"Like from user {user_id} on film {film_id} inserted concurrently")
            return False

        return True

    def remove_like(self, film_id: int, user_id: int, commit: bool = True) -> bool:
        """
        Delete a like edge.

        Returns:
            True if deleted, False if not found
        """
        count = (
            self.db.query(Like)
            .filter(Like.film_id == film_id, Like.user_id == user_id)
            .delete()
        )
        if commit:
            self.db.commit()

        return count > 0

    def get_user_likes(self) -> Dict[int, Set[int]]:
        """
        Load the full like matrix.

        Returns:
            Dict mapping user_id to the set of liked film IDs
        """
        result: Dict[int, Set[int]] = defaultdict(set)
        for user_id, film_id in self.db.query(Like.user_id, Like.film_id).all():
            result[user_id].add(film_id)
        return dict(result)
