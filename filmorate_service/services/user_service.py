"""Service for user profiles."""
import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from filmorate_service.exceptions import ValidationError
from filmorate_service.models import User
from filmorate_service.repos import UserRepository

logger = logging.getLogger(__name__)


def validate_user_data(user_data: dict) -> None:
    """
    Check the profile fields every stored user must satisfy.

    Raises:
        ValidationError: on a missing or malformed email, a blank login or one
            containing whitespace, or a birthday in the future
    """
    email = user_data.get("email")
    if not isinstance(email, str) or not email.strip() or "@" not in email:
        raise ValidationError("email must not be blank and must contain '@'")

    login = user_data.get("login")
    if not isinstance(login, str) or not login.strip() or any(ch.isspace() for ch in login):
        raise ValidationError("login must not be blank or contain spaces")

    name = user_data.get("name")
    if name is not None and not isinstance(name, str):
        raise ValidationError("name must be a string")

    birthday = user_data.get("birthday")
    if birthday is not None and birthday > date.today():
        raise ValidationError("birthday must not be in the future")


class UserService:
    """
    Registers and updates users. A blank name is stored as the login.
    """

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def create_user(self, user_data: dict) -> User:
        """
        Register a user.

        Args:
            user_data: Dict with email, login and optional name/birthday

        Raises:
            ValidationError: if the profile fields are invalid
        """
        validate_user_data(user_data)
        return self.user_repo.create_user(user_data)

    def update_user(self, user_id: int, user_data: dict) -> User:
        """
        Raises:
            ValidationError: if the profile fields are invalid
            UserNotFound: if the user does not exist
        """
        validate_user_data(user_data)
        return self.user_repo.update_user(user_id, user_data)

    def get_user(self, user_id: int) -> User:
        """
        Raises:
            UserNotFound: if the user does not exist
        """
        return self.user_repo.get_user_or_raise(user_id)

    def get_all_users(self) -> List[User]:
        return self.user_repo.get_all_users()
