"""Service for the per-user activity feed."""
import logging
import time
from typing import List

from sqlalchemy.orm import Session

from filmorate_service.models import EventType, FeedEvent, Operation
from filmorate_service.repos import FeedRepository, UserRepository

logger = logging.getLogger(__name__)


def current_millis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class FeedService:
    """
    Append-only log of user actions.

    Events are stamped when they are logged; equal timestamps are ordered by
    the store-assigned event ID.
    """

    def __init__(self, db: Session):
        self.db = db
        self.feed_repo = FeedRepository(db)
        self.user_repo = UserRepository(db)

    def log(
            self,
            user_id: int,
            event_type: EventType,
            operation: Operation,
            entity_id: int,
            commit: bool = True
    ) -> FeedEvent:
        """
        Append an event to ``user_id``'s feed.

        Args:
            user_id: Acting user
            event_type: LIKE, REVIEW or FRIEND
            operation: ADD, UPDATE or REMOVE
            entity_id: Affected film, review or friend ID
            commit: False when the caller commits the event together with its own write

        Returns:
            The stored event
        """
        event = self.feed_repo.add_event(
            user_id=user_id,
            event_type=event_type,
            operation=operation,
            entity_id=entity_id,
            timestamp=current_millis(),
            commit=commit,
        )
        logger.info(
            f"Feed event {event.event_id}: user {user_id} "
            f"{event_type.value} {operation.value} {entity_id}"
        )
        return event

    def get_user_feed(self, user_id: int) -> List[FeedEvent]:
        """
        Get all events of a user in chronological order.

        Raises:
            UserNotFound: if the user does not exist
        """
        self.user_repo.get_user_or_raise(user_id)
        return self.feed_repo.get_events_for_user(user_id)
