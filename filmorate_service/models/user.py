"""Registered users"""
from sqlalchemy import Column, Date, Integer, String

from filmorate_service.models.base import Base


class User(Base):
    """A registered user.

    ``name`` is the display name; when blank it falls back to ``login``.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False)
    login = Column(String(100), nullable=False)
    name = Column(String(255), nullable=True)
    birthday = Column(Date, nullable=True)

    @property
    def display_name(self) -> str:
        if self.name is None or not self.name.strip():
            return self.login
        return self.name

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'email': self.email,
            'login': self.login,
            'name': self.display_name,
            'birthday': self.birthday.isoformat() if self.birthday else None,
        }

    def __repr__(self):
        return f"<User(id={self.id}, login='{self.login}')>"
