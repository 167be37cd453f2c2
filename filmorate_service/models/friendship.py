"""Directed friend requests"""
from sqlalchemy import Column, Enum, ForeignKey, Integer

from filmorate_service.models.base import Base
from filmorate_service.models.enums import FriendshipStatus


class Friendship(Base):
    """Edge from ``user_id`` to ``friend_id``.

    Edges are directed: a request from A to B says nothing about B to A.
    """
    __tablename__ = 'friendships'

    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    friend_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    status = Column(
        Enum(FriendshipStatus, name='friendship_status', native_enum=False),
        nullable=False,
        default=FriendshipStatus.PENDING,
    )

    def __repr__(self):
        return (
            f"<Friendship(user_id={self.user_id}, friend_id={self.friend_id}, "
            f"status={self.status.value if self.status else None})>"
        )
