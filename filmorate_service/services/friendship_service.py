"""Service for the directed, confirmable friendship graph."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from filmorate_service.exceptions import FriendshipNotFound
from filmorate_service.models import EventType, FriendshipStatus, Operation, User
from filmorate_service.repos import FriendshipRepository, UserRepository
from filmorate_service.services.feed_service import FeedService
from filmorate_service.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class FriendshipService:
    """
    Friend requests, confirmations and friend queries.

    Every add/confirm/remove is logged to the acting user's feed.
    """

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)
        self.friendship_repo = FriendshipRepository(db)
        self.feed = FeedService(db)

    def add_friend(self, user_id: int, friend_id: int) -> None:
        """
        Send a friend request from ``user_id`` to ``friend_id``.

        Re-adding an existing edge resets it to PENDING.

        Raises:
            UserNotFound: if either user does not exist
        """
        self.user_repo.get_user_or_raise(user_id)
        self.user_repo.get_user_or_raise(friend_id)

        with atomic(self.db):
            self.friendship_repo.add_friend(user_id, friend_id, commit=False)
            self.feed.log(user_id, EventType.FRIEND, Operation.ADD, friend_id, commit=False)

        logger.info(f"User {user_id} added friend {friend_id}")

    def confirm_friend(self, user_id: int, friend_id: int) -> None:
        """
        Confirm the edge from ``user_id`` to ``friend_id``.

        Raises:
            UserNotFound: if either user does not exist
            FriendshipNotFound: if there is no such edge
        """
        self.user_repo.get_user_or_raise(user_id)
        self.user_repo.get_user_or_raise(friend_id)

        with atomic(self.db):
            if not self.friendship_repo.confirm_friend(user_id, friend_id, commit=False):
                raise FriendshipNotFound(user_id, friend_id)
            self.feed.log(user_id, EventType.FRIEND, Operation.UPDATE, friend_id, commit=False)

        logger.info(f"User {user_id} confirmed friend {friend_id}")

    def remove_friend(self, user_id: int, friend_id: int) -> None:
        """
        Delete the edge from ``user_id`` to ``friend_id`` if present.

        Raises:
            UserNotFound: if either user does not exist
        """
        self.user_repo.get_user_or_raise(user_id)
        self.user_repo.get_user_or_raise(friend_id)

        with atomic(self.db):
            removed = self.friendship_repo.remove_friend(user_id, friend_id, commit=False)
            self.feed.log(user_id, EventType.FRIEND, Operation.REMOVE, friend_id, commit=False)

        if removed:
            logger.info(f"User {user_id} removed friend {friend_id}")
        else:
            logger.debug(f"User {user_id} had no edge to {friend_id}")

    def get_friends(
            self,
            user_id: int,
            status: Optional[FriendshipStatus] = None
    ) -> List[User]:
        """
        Get the targets of a user's outgoing edges.

        Args:
            user_id: Source user
            status: Only edges with this status (None = any)

        Raises:
            UserNotFound: if the user does not exist
        """
        self.user_repo.get_user_or_raise(user_id)
        return self.friendship_repo.get_friends(user_id, status)

    def get_common_friends(self, user_id: int, other_id: int) -> List[User]:
        """
        Get users both ``user_id`` and ``other_id`` have an edge to.

        Order follows ``user_id``'s friend list.

        Raises:
            UserNotFound: if either user does not exist
        """
        self.user_repo.get_user_or_raise(user_id)
        self.user_repo.get_user_or_raise(other_id)

        user_friends = self.friendship_repo.get_friends(user_id)
        other_friend_ids = {friend.id for friend in self.friendship_repo.get_friends(other_id)}

        return [friend for friend in user_friends if friend.id in other_friend_ids]
