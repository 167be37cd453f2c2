"""Append-only activity feed"""
from sqlalchemy import BigInteger, Column, Enum, ForeignKey, Index, Integer

from filmorate_service.models.base import Base
from filmorate_service.models.enums import EventType, Operation


class FeedEvent(Base):
    """One user-visible action. Rows are never updated or deleted."""
    __tablename__ = 'feed_events'

    event_id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(BigInteger, nullable=False)  # epoch millis
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    event_type = Column(Enum(EventType, name='event_type', native_enum=False), nullable=False)
    operation = Column(Enum(Operation, name='operation', native_enum=False), nullable=False)
    entity_id = Column(Integer, nullable=False)

    __table_args__ = (
        Index('idx_feed_user_timestamp', 'user_id', 'timestamp', 'event_id'),
    )

    def to_dict(self) -> dict:
        return {
            'eventId': self.event_id,
            'timestamp': self.timestamp,
            'userId': self.user_id,
            'eventType': self.event_type.value,
            'operation': self.operation.value,
            'entityId': self.entity_id,
        }

    def __repr__(self):
        return (
            f"<FeedEvent(event_id={self.event_id}, user_id={self.user_id}, "
            f"{self.event_type.value if self.event_type else None}/"
            f"{self.operation.value if self.operation else None})>"
        )
