"""Repository for films and like-count rankings."""

import logging
from typing import Iterable, List, Optional, Set

from sqlalchemy import desc, extract, func, or_, select
from sqlalchemy.orm import Query, Session

from filmorate_service.exceptions import DirectorNotFound, FilmNotFound
from filmorate_service.models import Director, Film, Genre, Like, MpaRating

logger = logging.getLogger(__name__)


class FilmRepository:
    """
    Repository for films.

    Every ranked listing orders by like count descending, then film ID
    ascending, so films without likes are still returned and sort last.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_film(self, film_data: dict) -> Film:
        """
        Store a new film with its MPA rating, genres and directors.

        Args:
            film_data: Dict with keys:
                - name: str
                - release_date: date
                - duration: int
                - mpa_id: int
                - description: str (optional)
                - genre_ids: list of int (optional, duplicates collapsed)
                - director_ids: list of int (optional, duplicates collapsed)

        Returns:
            Created Film
        """
        film = Film(
            name=film_data["name"],
            description=film_data.get("description"),
            release_date=film_data["release_date"],
            duration=film_data["duration"],
            mpa_id=film_data["mpa_id"],
        )

        self._set_references(film, film_data)

        self.db.add(film)
        self.db.commit()
        self.db.refresh(film)

        logger.info(f"Created film {film.id} ({film.name})")
        return film

    def update_film(self, film_id: int, film_data: dict) -> Film:
        """
        Replace a film's fields, genres and directors.

        Args:
            film_id: Film to update
            film_data: Same keys as for create_film

        Raises:
            FilmNotFound: if the film does not exist
        """
        film = self.get_film_or_raise(film_id)

        film.name = film_data["name"]  # type: ignore[assignment]
        film.description = film_data.get("description")  # type: ignore[assignment]
        film.release_date = film_data["release_date"]  # type: ignore[assignment]
        film.duration = film_data["duration"]  # type: ignore[assignment]
        film.mpa_id = film_data["mpa_id"]  # type: ignore[assignment]
        self._set_references(film, film_data)

        self.db.commit()
        self.db.refresh(film)

        logger.info(f"Updated film {film.id}")
        return film

    def _set_references(self, film: Film, film_data: dict) -> None:
        genre_ids = set(film_data.get("genre_ids") or [])
        film.genres = (
            self.db.query(Genre).filter(Genre.id.in_(genre_ids)).all() if genre_ids else []
        )

        director_ids = set(film_data.get("director_ids") or [])
        film.directors = (
            self.db.query(Director).filter(Director.id.in_(director_ids)).all() if director_ids else []
        )

    def get_film(self, film_id: int) -> Optional[Film]:
        """Get film by ID."""
        return self.db.query(Film).filter(Film.id == film_id).first()

    def get_film_or_raise(self, film_id: int) -> Film:
        """Get film by ID, raising FilmNotFound when absent."""
        film = self.get_film(film_id)
        if film is None:
            raise FilmNotFound(film_id)
        return film

    # noinspection PyTypeChecker
    def get_all_films(self) -> List[Film]:
        """Get all films ordered by ID."""
        return self.db.query(Film).order_by(Film.id).all()

    # noinspection PyTypeChecker
    def get_films_by_ids(self, film_ids: List[int]) -> List[Film]:
        """
        Get films by ID, preserving the order of ``film_ids``.

        Unknown IDs are skipped.
        """
        if not film_ids:
            return []

        films = self.db.query(Film).filter(Film.id.in_(film_ids)).all()
        by_id = {film.id: film for film in films}
        return [by_id[film_id] for film_id in film_ids if film_id in by_id]

    def get_director(self, director_id: int) -> Optional[Director]:
        """Get director by ID."""
        return self.db.query(Director).filter(Director.id == director_id).first()

    def get_director_or_raise(self, director_id: int) -> Director:
        """Get director by ID, raising DirectorNotFound when absent."""
        director = self.get_director(director_id)
        if director is None:
            raise DirectorNotFound(director_id)
        return director

    def get_mpa(self, mpa_id: int) -> Optional[MpaRating]:
        """Get MPA rating by ID."""
        return self.db.query(MpaRating).filter(MpaRating.id == mpa_id).first()

    def get_missing_genre_ids(self, genre_ids: Iterable[int]) -> Set[int]:
        """Return the requested genre IDs that do not exist."""
        requested = set(genre_ids)
        if not requested:
            return set()
        found = self.db.query(Genre.id).filter(Genre.id.in_(requested)).all()
        return requested - {row[0] for row in found}

    def get_missing_director_ids(self, director_ids: Iterable[int]) -> Set[int]:
        """Return the requested director IDs that do not exist."""
        requested = set(director_ids)
        if not requested:
            return set()
        found = self.db.query(Director.id).filter(Director.id.in_(requested)).all()
        return requested - {row[0] for row in found}

    def _rank_by_likes(self, query: Query) -> Query:
        """Order a film query by like count descending, then ID ascending."""
        like_counts = (
            self.db.query(Like.film_id.label("film_id"), func.count(Like.user_id).label("likes"))
            .group_by(Like.film_id)
            .subquery()
        )
        likes = func.coalesce(like_counts.c.likes, 0)

        return (
            query.outerjoin(like_counts, like_counts.c.film_id == Film.id)
            .order_by(desc(likes), Film.id)
        )

    # noinspection PyTypeChecker
    def get_popular_films(
            self,
            count: int,
            genre_id: Optional[int] = None,
            year: Optional[int] = None
    ) -> List[Film]:
        """
        Get the most liked films.

        Args:
            count: Maximum number of films to return
            genre_id: Only films with this genre
            year: Only films released in this year

        Returns:
            List of Film ranked by like count
        """
        query = self.db.query(Film)

        if genre_id is not None:
            query = query.filter(Film.genres.any(Genre.id == genre_id))

        if year is not None:
            query = query.filter(extract("year", Film.release_date) == year)

        return self._rank_by_likes(query).limit(count).all()

    # noinspection PyTypeChecker
    def get_common_films(self, user_id: int, other_id: int) -> List[Film]:
        """Get films liked by both users, ranked by global like count."""
        user_films = select(Like.film_id).where(Like.user_id == user_id)
        other_films = select(Like.film_id).where(Like.user_id == other_id)

        query = self.db.query(Film).filter(
            Film.id.in_(user_films),
            Film.id.in_(other_films),
        )

        return self._rank_by_likes(query).all()

    # noinspection PyTypeChecker
    def search_films(
            self,
            text: str,
            by_title: bool = True,
            by_director: bool = False
    ) -> List[Film]:
        """
        Case-insensitive substring search over titles and/or director names.

        Args:
            text: Substring to look for
            by_title: Match against film titles
            by_director: Match against director names

        Returns:
            Matching films ranked by like count
        """
        conditions = []
        if by_title:
            conditions.append(Film.name.icontains(text, autoescape=True))
        if by_director:
            conditions.append(Film.directors.any(Director.name.icontains(text, autoescape=True)))

        if not conditions:
            return []

        query = self.db.query(Film).filter(or_(*conditions))

        return self._rank_by_likes(query).all()

    # noinspection PyTypeChecker
    def get_films_by_director(self, director_id: int, sort_by: str = "likes") -> List[Film]:
        """
        Get a director's films.

        Args:
            director_id: Director ID
            sort_by: "year" for release date ascending, "likes" for like count descending

        Returns:
            List of Film
        """
        query = self.db.query(Film).filter(Film.directors.any(Director.id == director_id))

        if sort_by == "year":
            return query.order_by(Film.release_date, Film.id).all()

        return self._rank_by_likes(query).all()
