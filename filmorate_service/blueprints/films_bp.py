"""Film catalogue, like, ranking and search endpoints."""
import logging

import azure.functions as func

from filmorate_service.blueprints.http import (
    api_endpoint,
    empty_response,
    json_body,
    json_response,
    parse_date,
    parse_id,
    parse_id_list,
    query_int,
    require_fields,
    route_int,
    session_scope,
)
from filmorate_service.exceptions import ValidationError
from filmorate_service.services import FilmService, LikeService

# Initialize blueprint
bp = func.Blueprint()

logger = logging.getLogger(__name__)


def _film_data(body: dict) -> dict:
    require_fields(body, 'name', 'releaseDate', 'duration', 'mpa')

    mpa = body['mpa']
    if not isinstance(mpa, dict) or 'id' not in mpa:
        raise ValidationError("mpa must be an object with an id")

    return {
        'name': body['name'],
        'description': body.get('description'),
        'release_date': parse_date(body['releaseDate'], 'releaseDate'),
        'duration': parse_id(body['duration'], 'duration'),
        'mpa_id': parse_id(mpa['id'], 'mpa.id'),
        'genre_ids': parse_id_list(body.get('genres'), 'genres'),
        'director_ids': parse_id_list(body.get('directors'), 'directors'),
    }


@bp.route(route="films", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def create_film(req: func.HttpRequest) -> func.HttpResponse:
    """
    Register a film.

    Body: {"name": str, "description": str, "releaseDate": "YYYY-MM-DD", "duration": int,
           "mpa": {"id": int}, "genres": [{"id": int}], "directors": [{"id": int}]}
    """
    film_data = _film_data(json_body(req))

    with session_scope() as db:
        film = FilmService(db).create_film(film_data)
        return json_response(film.to_dict(), status_code=201)


@bp.route(route="films", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def update_film(req: func.HttpRequest) -> func.HttpResponse:
    """
    Replace a film.

    Body: same as for creation plus {"id": int}
    """
    body = json_body(req)
    require_fields(body, 'id')
    film_id = parse_id(body['id'], 'id')
    film_data = _film_data(body)

    with session_scope() as db:
        film = FilmService(db).update_film(film_id, film_data)
        return json_response(film.to_dict())


@bp.route(route="films", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_films(req: func.HttpRequest) -> func.HttpResponse:
    """List all films."""
    with session_scope() as db:
        films = FilmService(db).get_all_films()
        return json_response([film.to_dict() for film in films])


@bp.route(route="films/{film_id:int}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_film(req: func.HttpRequest) -> func.HttpResponse:
    """Get one film."""
    film_id = route_int(req, 'film_id')

    with session_scope() as db:
        film = FilmService(db).get_film(film_id)
        return json_response(film.to_dict())


@bp.route(route="films/{film_id}/like/{user_id}", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def add_film_like(req: func.HttpRequest) -> func.HttpResponse:
    """Like a film. Repeating the request is a no-op."""
    film_id = route_int(req, 'film_id')
    user_id = route_int(req, 'user_id')

    with session_scope() as db:
        LikeService(db).add_like(film_id, user_id)

    return empty_response()


@bp.route(route="films/{film_id}/like/{user_id}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def remove_film_like(req: func.HttpRequest) -> func.HttpResponse:
    """Remove a like from a film."""
    film_id = route_int(req, 'film_id')
    user_id = route_int(req, 'user_id')

    with session_scope() as db:
        LikeService(db).remove_like(film_id, user_id)

    return empty_response()


@bp.route(route="films/popular", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_popular_films(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get the most liked films.

    Query Parameters:
        - count: Number of films (default: 10)
        - genreId: Only films of this genre
        - year: Only films released this year
    """
    count = query_int(req, 'count')
    genre_id = query_int(req, 'genreId')
    year = query_int(req, 'year')

    with session_scope() as db:
        films = FilmService(db).get_popular_films(count=count, genre_id=genre_id, year=year)
        return json_response([film.to_dict() for film in films])


@bp.route(route="films/common", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_common_films(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get films liked by both users.

    Query Parameters:
        - userId: First user (required)
        - friendId: Second user (required)
    """
    user_id = query_int(req, 'userId', required=True)
    friend_id = query_int(req, 'friendId', required=True)

    with session_scope() as db:
        films = FilmService(db).get_common_films(user_id, friend_id)
        return json_response([film.to_dict() for film in films])


@bp.route(route="films/search", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def search_films(req: func.HttpRequest) -> func.HttpResponse:
    """
    Search films.

    Query Parameters:
        - query: Substring to look for (required)
        - by: Comma-separated fields, "title" and/or "director" (default: both)
    """
    query = req.params.get('query')
    if query is None:
        raise ValidationError("query is required")

    by = req.params.get('by', 'title,director').split(',')

    with session_scope() as db:
        films = FilmService(db).search_films(query, by)
        return json_response([film.to_dict() for film in films])


@bp.route(route="films/director/{director_id}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_films_by_director(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get a director's films.

    Query Parameters:
        - sortBy: "year" or "likes" (default: likes)
    """
    director_id = route_int(req, 'director_id')
    sort_by = req.params.get('sortBy', 'likes')

    with session_scope() as db:
        films = FilmService(db).get_films_by_director(director_id, sort_by)
        return json_response([film.to_dict() for film in films])
