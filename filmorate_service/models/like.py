"""Film likes: one row per (film, user) pair."""
from sqlalchemy import Column, ForeignKey, Index, Integer

from filmorate_service.models.base import Base


class Like(Base):
    """Membership edge between a user and a film they like.

    The composite primary key is the uniqueness constraint that keeps
    concurrent duplicate likes down to a single row.
    """
    __tablename__ = 'likes'

    film_id = Column(Integer, ForeignKey('films.id', ondelete='CASCADE'), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)

    __table_args__ = (
        Index('idx_likes_user_id', 'user_id'),
    )

    def __repr__(self):
        return f"<Like(film_id={self.film_id}, user_id={self.user_id})>"
