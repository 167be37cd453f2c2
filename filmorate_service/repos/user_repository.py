"""Repository for user lookups."""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from filmorate_service.exceptions import UserNotFound
from filmorate_service.models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Repository for reading and writing users.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, user_data: dict) -> User:
        """
        Store a new user.

        Args:
            user_data: Dict with email, login and optional name/birthday

        Returns:
            Created User with its assigned id
        """
        name = user_data.get("name")
        if name is None or not name.strip():
            name = user_data["login"]

        user = User(
            email=user_data["email"],
            login=user_data["login"],
            name=name,
            birthday=user_data.get("birthday"),
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Created user {user.id} ({user.login})")
        return user

    def update_user(self, user_id: int, user_data: dict) -> User:
        """
        Replace a user's profile fields.

        Args:
            user_id: User to update
            user_data: Dict with email, login and optional name/birthday

        Raises:
            UserNotFound: if the user does not exist
        """
        user = self.get_user_or_raise(user_id)

        name = user_data.get("name")
        if name is None or not name.strip():
            name = user_data["login"]

        user.email = user_data["email"]  # type: ignore[assignment]
        user.login = user_data["login"]  # type: ignore[assignment]
        user.name = name  # type: ignore[assignment]
        user.birthday = user_data.get("birthday")  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Updated user {user.id}")
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_or_raise(self, user_id: int) -> User:
        """Get user by ID, raising UserNotFound when absent."""
        user = self.get_user(user_id)
        if user is None:
            raise UserNotFound(user_id)
        return user

    # noinspection PyTypeChecker
    def get_all_users(self) -> List[User]:
        """Get all users ordered by ID."""
        return self.db.query(User).order_by(User.id).all()
