"""Repository for directed friendship edges."""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from filmorate_service.models import Friendship, FriendshipStatus, User

logger = logging.getLogger(__name__)


class FriendshipRepository:
    """
    Repository for the friendship graph.

    At most one edge exists per ordered (user_id, friend_id) pair.
    """

    def __init__(self, db: Session):
        self.db = db

    def _save(self, commit: bool) -> None:
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    def get_edge(self, user_id: int, friend_id: int) -> Optional[Friendship]:
        """Get the edge from ``user_id`` to ``friend_id``."""
        return (
            self.db.query(Friendship)
            .filter(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
            .first()
        )

    def add_friend(self, user_id: int, friend_id: int, commit: bool = True) -> Friendship:
        """
        Create a PENDING edge, or reset an existing edge to PENDING.

        Args:
            user_id: Requesting user
            friend_id: Requested friend
            commit: Commit immediately (False = only flush into the open transaction)

        Returns:
            The stored Friendship
        """
        edge = self.get_edge(user_id, friend_id)

        if edge:
            edge.status = FriendshipStatus.PENDING  # type: ignore[assignment]
        else:
            edge = Friendship(
                user_id=user_id,
                friend_id=friend_id,
                status=FriendshipStatus.PENDING,
            )
            self.db.add(edge)

        try:
            self._save(commit)
        except IntegrityError:
            # The same request was inserted concurrently; fall back to the update path
            self.db.rollback()
            logger.debug(f"Friendship {user_id}->{friend_id} inserted concurrently")
            edge = self.get_edge(user_id, friend_id)
            edge.status = FriendshipStatus.PENDING  # type: ignore[union-attr, assignment]
            self._save(commit)

        if commit:
            self.db.refresh(edge)

        return edge

    def confirm_friend(self, user_id: int, friend_id: int, commit: bool = True) -> bool:
        """
        Mark the edge from ``user_id`` to ``friend_id`` as CONFIRMED.

        Returns:
            True if updated, False if no such edge
        """
        count = (
            self.db.query(Friendship)
            .filter(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
            .update({Friendship.status: FriendshipStatus.CONFIRMED})
        )
        if commit:
            self.db.commit()

        return count > 0

    def remove_friend(self, user_id: int, friend_id: int, commit: bool = True) -> bool:
        """
        Delete the edge from ``user_id`` to ``friend_id``.

        Returns:
            True if deleted, False if not found
        """
        count = (
            self.db.query(Friendship)
            .filter(Friendship.user_id == user_id, Friendship.friend_id == friend_id)
            .delete()
        )
        if commit:
            self.db.commit()

        return count > 0

    # noinspection PyTypeChecker
    def get_friends(
            self,
            user_id: int,
            status: Optional[FriendshipStatus] = None
    ) -> List[User]:
        """
        Get the users at the far end of ``user_id``'s outgoing edges.

        Args:
            user_id: Source user
            status: Only follow edges with this status (None = any status)

        Returns:
            Users ordered by ID
        """
        query = (
            self.db.query(User)
            .join(Friendship, Friendship.friend_id == User.id)
            .filter(Friendship.user_id == user_id)
        )

        if status is not None:
            query = query.filter(Friendship.status == status)

        return query.order_by(User.id).all()

