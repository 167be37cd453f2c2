"""Repository classes"""

from filmorate_service.repos.feed_repository import FeedRepository
from filmorate_service.repos.film_repository import FilmRepository
from filmorate_service.repos.friendship_repository import FriendshipRepository
from filmorate_service.repos.like_repository import LikeRepository
from filmorate_service.repos.review_repository import ReviewRepository
from filmorate_service.repos.user_repository import UserRepository

__all__ = [
    "FeedRepository",
    "FilmRepository",
    "FriendshipRepository",
    "LikeRepository",
    "ReviewRepository",
    "UserRepository",
]
