"""Service for films, rankings and search."""
import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from filmorate_service.config import get_popular_films_default_count
from filmorate_service.exceptions import DirectorNotFound, GenreNotFound, MpaNotFound, ValidationError
from filmorate_service.models import Film
from filmorate_service.repos import FilmRepository, UserRepository

logger = logging.getLogger(__name__)

EARLIEST_RELEASE_YEAR = 1895
EARLIEST_RELEASE_DATE = date(1895, 12, 28)
MAX_DESCRIPTION_LENGTH = 200
SEARCH_FIELDS = frozenset({"title", "director"})
DIRECTOR_SORT_FIELDS = frozenset({"year", "likes"})


class FilmService:
    """
    Film registration plus popular, common, searched and per-director listings.

    Listing parameters are validated before any database access.
    """

    def __init__(self, db: Session):
        self.db = db
        self.film_repo = FilmRepository(db)
        self.user_repo = UserRepository(db)

    def create_film(self, film_data: dict) -> Film:
        """
        Register a film.

        Args:
            film_data: Dict with name, release_date, duration, mpa_id and
                optional description, genre_ids, director_ids

        Raises:
            ValidationError: if a field is missing or out of range
            MpaNotFound, GenreNotFound, DirectorNotFound: on unknown references
        """
        self._validate(film_data)
        return self.film_repo.create_film(film_data)

    def update_film(self, film_id: int, film_data: dict) -> Film:
        """
        Replace a film's fields and references.

        Raises:
            ValidationError: if a field is missing or out of range
            FilmNotFound: if the film does not exist
            MpaNotFound, GenreNotFound, DirectorNotFound: on unknown references
        """
        self._validate(film_data)
        return self.film_repo.update_film(film_id, film_data)

    def get_film(self, film_id: int) -> Film:
        return self.film_repo.get_film_or_raise(film_id)

    def get_all_films(self) -> List[Film]:
        return self.film_repo.get_all_films()

    def _validate(self, film_data: dict) -> None:
        name = film_data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("name must not be blank")

        description = film_data.get("description")
        if description is not None:
            if not isinstance(description, str) or len(description) > MAX_DESCRIPTION_LENGTH:
                raise ValidationError(f"description must be a string of at most {MAX_DESCRIPTION_LENGTH} characters")

        release_date = film_data.get("release_date")
        if release_date is None:
            raise ValidationError("releaseDate is required")
        if release_date < EARLIEST_RELEASE_DATE:
            raise ValidationError(f"releaseDate must not be earlier than {EARLIEST_RELEASE_DATE.isoformat()}")

        duration = film_data.get("duration")
        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise ValidationError("duration must be positive")

        mpa_id = film_data.get("mpa_id")
        if mpa_id is None:
            raise ValidationError("mpa is required")
        if self.film_repo.get_mpa(mpa_id) is None:
            raise MpaNotFound(mpa_id)

        missing_genres = self.film_repo.get_missing_genre_ids(film_data.get("genre_ids") or [])
        if missing_genres:
            raise GenreNotFound(min(missing_genres))

        missing_directors = self.film_repo.get_missing_director_ids(film_data.get("director_ids") or [])
        if missing_directors:
            raise DirectorNotFound(min(missing_directors))

    def get_popular_films(
            self,
            count: Optional[int] = None,
            genre_id: Optional[int] = None,
            year: Optional[int] = None
    ) -> List[Film]:
        """
        Get the most liked films.

        Args:
            count: Maximum number of films (None = from config)
            genre_id: Only films with this genre
            year: Only films released in this year

        Raises:
            ValidationError: on non-positive count or genre_id, or year before 1895
        """
        if count is None:
            count = get_popular_films_default_count()
        if count <= 0:
            raise ValidationError("count must be positive")
        if genre_id is not None and genre_id <= 0:
            raise ValidationError("genreId must be positive")
        if year is not None and year < EARLIEST_RELEASE_YEAR:
            raise ValidationError(f"year must not be earlier than {EARLIEST_RELEASE_YEAR}")

        return self.film_repo.get_popular_films(count, genre_id=genre_id, year=year)

    def get_common_films(self, user_id: int, friend_id: int) -> List[Film]:
        """
        Get films both users like, most liked first.

        Raises:
            UserNotFound: if either user does not exist
        """
        self.user_repo.get_user_or_raise(user_id)
        self.user_repo.get_user_or_raise(friend_id)

        return self.film_repo.get_common_films(user_id, friend_id)

    def search_films(self, query: str, by: Iterable[str]) -> List[Film]:
        """
        Search films by title and/or director name.

        Args:
            query: Case-insensitive substring
            by: Fields to match, any of "title" and "director"; matches on
                any requested field qualify

        Raises:
            ValidationError: if ``by`` is empty or names an unknown field
        """
        fields = {field.strip().lower() for field in by if field and field.strip()}
        if not fields:
            raise ValidationError("'by' must contain 'title' and/or 'director'")

        unknown = fields - SEARCH_FIELDS
        if unknown:
            raise ValidationError(f"Unknown search fields: {', '.join(sorted(unknown))}")

        films = self.film_repo.search_films(
            query or "",
            by_title="title" in fields,
            by_director="director" in fields,
        )
        logger.debug(f"Search {query!r} by {sorted(fields)} matched {len(films)} films")
        return films

    def get_films_by_director(self, director_id: int, sort_by: str = "likes") -> List[Film]:
        """
        Get a director's films.

        Args:
            director_id: Director ID
            sort_by: "year" or "likes"

        Raises:
            ValidationError: on an unknown sort_by
            DirectorNotFound: if the director does not exist
        """
        if sort_by not in DIRECTOR_SORT_FIELDS:
            raise ValidationError("sortBy must be 'year' or 'likes'")

        self.film_repo.get_director_or_raise(director_id)
        return self.film_repo.get_films_by_director(director_id, sort_by)
