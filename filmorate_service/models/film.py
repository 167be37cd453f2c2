"""Films and their genre/director associations"""
from sqlalchemy import Column, Date, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from filmorate_service.models.base import Base

film_genres = Table(
    'film_genres',
    Base.metadata,
    Column('film_id', Integer, ForeignKey('films.id', ondelete='CASCADE'), primary_key=True),
    Column('genre_id', Integer, ForeignKey('genres.id'), primary_key=True),
)

film_directors = Table(
    'film_directors',
    Base.metadata,
    Column('film_id', Integer, ForeignKey('films.id', ondelete='CASCADE'), primary_key=True),
    Column('director_id', Integer, ForeignKey('directors.id', ondelete='CASCADE'), primary_key=True),
)


class Film(Base):
    """A film with exactly one MPA rating and any number of genres and directors."""
    __tablename__ = 'films'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(String(200), nullable=True)
    release_date = Column(Date, nullable=False)
    duration = Column(Integer, nullable=False)
    mpa_id = Column(Integer, ForeignKey('mpa_ratings.id'), nullable=False)

    mpa = relationship('MpaRating')
    genres = relationship('Genre', secondary=film_genres, order_by='Genre.id')
    directors = relationship('Director', secondary=film_directors, order_by='Director.id')

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'releaseDate': self.release_date.isoformat() if self.release_date else None,
            'duration': self.duration,
            'mpa': self.mpa.to_dict() if self.mpa else None,
            'genres': [genre.to_dict() for genre in self.genres],
            'directors': [director.to_dict() for director in self.directors],
        }

    def __repr__(self):
        return f"<Film(id={self.id}, name='{self.name}')>"
