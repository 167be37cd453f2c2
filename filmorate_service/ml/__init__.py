"""Like-based collaborative filtering"""

from filmorate_service.ml.like_matrix import LikeMatrix

__all__ = ["LikeMatrix"]
