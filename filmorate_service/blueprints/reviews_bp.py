"""Review and review vote endpoints."""
import logging

import azure.functions as func

from filmorate_service.blueprints.http import (
    api_endpoint,
    empty_response,
    json_body,
    json_response,
    parse_id,
    query_int,
    require_fields,
    route_int,
    session_scope,
)
from filmorate_service.exceptions import ValidationError
from filmorate_service.services import ReviewService, VoteAction

# Initialize blueprint
bp = func.Blueprint()

logger = logging.getLogger(__name__)


def _parse_bool(value, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean")
    return value


@bp.route(route="reviews", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def create_review(req: func.HttpRequest) -> func.HttpResponse:
    """
    Create a review.

    Body: {"content": str, "isPositive": bool, "userId": int, "filmId": int}
    """
    body = json_body(req)
    require_fields(body, 'content', 'isPositive', 'userId', 'filmId')

    review_data = {
        'content': body['content'],
        'is_positive': _parse_bool(body['isPositive'], 'isPositive'),
        'user_id': parse_id(body['userId'], 'userId'),
        'film_id': parse_id(body['filmId'], 'filmId'),
    }

    with session_scope() as db:
        review = ReviewService(db).create_review(review_data)
        return json_response(review.to_dict(), status_code=201)


@bp.route(route="reviews", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def update_review(req: func.HttpRequest) -> func.HttpResponse:
    """
    Update a review's content and positivity.

    Body: {"reviewId": int, "content": str, "isPositive": bool}
    """
    body = json_body(req)
    require_fields(body, 'reviewId', 'content', 'isPositive')

    review_id = parse_id(body['reviewId'], 'reviewId')
    is_positive = _parse_bool(body['isPositive'], 'isPositive')

    with session_scope() as db:
        review = ReviewService(db).update_review(review_id, body['content'], is_positive)
        return json_response(review.to_dict())


@bp.route(route="reviews/{review_id}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def delete_review(req: func.HttpRequest) -> func.HttpResponse:
    """Delete a review."""
    review_id = route_int(req, 'review_id')

    with session_scope() as db:
        ReviewService(db).delete_review(review_id)

    return empty_response()


@bp.route(route="reviews/{review_id}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_review(req: func.HttpRequest) -> func.HttpResponse:
    """Get a review."""
    review_id = route_int(req, 'review_id')

    with session_scope() as db:
        review = ReviewService(db).get_review(review_id)
        return json_response(review.to_dict())


@bp.route(route="reviews", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_reviews(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get the most useful reviews.

    Query Parameters:
        - filmId: Only reviews of this film
        - count: Number of reviews (default: 10)
    """
    film_id = query_int(req, 'filmId')
    count = query_int(req, 'count')

    with session_scope() as db:
        reviews = ReviewService(db).get_reviews(film_id=film_id, count=count)
        return json_response([review.to_dict() for review in reviews])


def _vote(req: func.HttpRequest, action: VoteAction) -> func.HttpResponse:
    review_id = route_int(req, 'review_id')
    user_id = route_int(req, 'user_id')

    with session_scope() as db:
        ReviewService(db).scores.vote(review_id, user_id, action)

    return empty_response()


@bp.route(route="reviews/{review_id}/like/{user_id}", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def add_review_like(req: func.HttpRequest) -> func.HttpResponse:
    return _vote(req, VoteAction.ADD_LIKE)


@bp.route(route="reviews/{review_id}/dislike/{user_id}", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def add_review_dislike(req: func.HttpRequest) -> func.HttpResponse:
    return _vote(req, VoteAction.ADD_DISLIKE)


@bp.route(route="reviews/{review_id}/like/{user_id}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def remove_review_like(req: func.HttpRequest) -> func.HttpResponse:
    return _vote(req, VoteAction.REMOVE_LIKE)


@bp.route(route="reviews/{review_id}/dislike/{user_id}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def remove_review_dislike(req: func.HttpRequest) -> func.HttpResponse:
    return _vote(req, VoteAction.REMOVE_DISLIKE)
