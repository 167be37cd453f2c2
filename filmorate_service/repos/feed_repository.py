"""Repository for the append-only activity feed."""

import logging
from typing import List

from sqlalchemy.orm import Session

from filmorate_service.models import EventType, FeedEvent, Operation

logger = logging.getLogger(__name__)


class FeedRepository:
    """
    Repository for feed events. Events are only ever inserted.
    """

    def __init__(self, db: Session):
        self.db = db

    def add_event(
            self,
            user_id: int,
            event_type: EventType,
            operation: Operation,
            entity_id: int,
            timestamp: int,
            commit: bool = True
    ) -> FeedEvent:
        """
        Append one event.

        Args:
            user_id: Acting user whose feed receives the event
            event_type: LIKE, REVIEW or FRIEND
            operation: ADD, UPDATE or REMOVE
            entity_id: Affected film, review or friend ID
            timestamp: Epoch milliseconds
            commit: Commit immediately (False = only flush into the open transaction)

        Returns:
            Stored FeedEvent with its assigned event_id
        """
        event = FeedEvent(
            timestamp=timestamp,
            user_id=user_id,
            event_type=event_type,
            operation=operation,
            entity_id=entity_id,
        )
        self.db.add(event)
        if commit:
            self.db.commit()
            self.db.refresh(event)
        else:
            self.db.flush()

        return event

    # noinspection PyTypeChecker
    def get_events_for_user(self, user_id: int) -> List[FeedEvent]:
        """Get a user's events ordered by timestamp, then event ID."""
        return (
            self.db.query(FeedEvent)
            .filter(FeedEvent.user_id == user_id)
            .order_by(FeedEvent.timestamp, FeedEvent.event_id)
            .all()
        )

