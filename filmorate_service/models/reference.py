"""Reference data attached to films: MPA ratings, genres and directors."""
from sqlalchemy import Column, Integer, String

from filmorate_service.models.base import Base


class MpaRating(Base):
    __tablename__ = 'mpa_ratings'

    id = Column(Integer, primary_key=True)
    name = Column(String(10), nullable=False, unique=True)

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<MpaRating(id={self.id}, name='{self.name}')>"


class Genre(Base):
    __tablename__ = 'genres'

    id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False, unique=True)

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"


class Director(Base):
    __tablename__ = 'directors'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name}

    def __repr__(self):
        return f"<Director(id={self.id}, name='{self.name}')>"
