"""Domain errors raised by repositories and services.

The HTTP layer maps ``NotFoundError`` to 404 and ``ValidationError`` to 400.
"""


class FilmorateError(Exception):
    """Base class for all domain errors."""


class NotFoundError(FilmorateError):
    """An entity referenced by id does not exist."""

    entity = "Entity"

    def __init__(self, entity_id: int, message: str | None = None):
        self.entity_id = entity_id
        super().__init__(message or f"{self.entity} with id={entity_id} not found")


class UserNotFound(NotFoundError):
    entity = "User"


class FilmNotFound(NotFoundError):
    entity = "Film"


class ReviewNotFound(NotFoundError):
    entity = "Review"


class DirectorNotFound(NotFoundError):
    entity = "Director"


class MpaNotFound(NotFoundError):
    entity = "MPA rating"


class GenreNotFound(NotFoundError):
    entity = "Genre"


class FriendshipNotFound(NotFoundError):
    """No friendship edge from ``user_id`` to ``friend_id``."""

    entity = "Friendship"

    def __init__(self, user_id: int, friend_id: int):
        self.user_id = user_id
        self.friend_id = friend_id
        super().__init__(
            friend_id,
            f"Friendship from user {user_id} to user {friend_id} not found",
        )


class ValidationError(FilmorateError):
    """Malformed request parameters."""
