"""Service classes"""

from .feed_service import FeedService
from .film_service import FilmService
from .friendship_service import FriendshipService
from .like_service import LikeService
from .recommendation_service import RecommendationService
from .review_score_engine import ReviewScoreEngine, VoteAction
from .review_service import ReviewService
from .user_service import UserService

__all__ = [
    "FeedService",
    "FilmService",
    "FriendshipService",
    "LikeService",
    "RecommendationService",
    "ReviewScoreEngine",
    "ReviewService",
    "UserService",
    "VoteAction",
]
