"""Film reviews and the per-user votes on them"""
from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, Text

from filmorate_service.models.base import Base


class Review(Base):
    """A user's review of a film.

    ``useful`` is the net of like/dislike votes and is only ever changed
    by vote transitions.
    """
    __tablename__ = 'reviews'

    review_id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    is_positive = Column(Boolean, nullable=False)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    film_id = Column(Integer, ForeignKey('films.id', ondelete='CASCADE'), nullable=False)
    useful = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index('idx_reviews_film_useful', 'film_id', 'useful'),
    )

    def to_dict(self) -> dict:
        return {
            'reviewId': self.review_id,
            'content': self.content,
            'isPositive': self.is_positive,
            'userId': self.user_id,
            'filmId': self.film_id,
            'useful': self.useful,
        }

    def __repr__(self):
        return f"<Review(review_id={self.review_id}, film_id={self.film_id}, useful={self.useful})>"


class ReviewVote(Base):
    """At most one vote per (review, user); ``is_like`` False means dislike."""
    __tablename__ = 'review_likes'

    review_id = Column(Integer, ForeignKey('reviews.review_id', ondelete='CASCADE'), primary_key=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    is_like = Column(Boolean, nullable=False)

    def __repr__(self):
        return f"<ReviewVote(review_id={self.review_id}, user_id={self.user_id}, is_like={self.is_like})>"
