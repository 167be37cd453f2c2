"""SQLAlchemy models"""

from filmorate_service.models.base import Base
from filmorate_service.models.enums import EventType, FriendshipStatus, Operation
from filmorate_service.models.feed_event import FeedEvent
from filmorate_service.models.film import Film, film_directors, film_genres
from filmorate_service.models.friendship import Friendship
from filmorate_service.models.like import Like
from filmorate_service.models.reference import Director, Genre, MpaRating
from filmorate_service.models.review import Review, ReviewVote
from filmorate_service.models.user import User

__all__ = [
    "Base",
    "Director",
    "EventType",
    "FeedEvent",
    "Film",
    "Friendship",
    "FriendshipStatus",
    "Genre",
    "Like",
    "MpaRating",
    "Operation",
    "Review",
    "ReviewVote",
    "User",
    "film_directors",
    "film_genres",
]
