"""User profile, friendship, feed and recommendation endpoints."""
import logging

import azure.functions as func

from filmorate_service.blueprints.http import (
    api_endpoint,
    empty_response,
    json_body,
    json_response,
    parse_date,
    parse_id,
    require_fields,
    route_int,
    session_scope,
)
from filmorate_service.exceptions import ValidationError
from filmorate_service.models import FriendshipStatus
from filmorate_service.services import FeedService, FriendshipService, RecommendationService, UserService

# Initialize blueprint
bp = func.Blueprint()

logger = logging.getLogger(__name__)


def _user_data(body: dict) -> dict:
    require_fields(body, 'email', 'login')
    return {
        'email': body['email'],
        'login': body['login'],
        'name': body.get('name'),
        'birthday': parse_date(body.get('birthday'), 'birthday'),
    }


@bp.route(route="users", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def create_user(req: func.HttpRequest) -> func.HttpResponse:
    """
    Register a user.

    Body: {"email": str, "login": str, "name": str, "birthday": "YYYY-MM-DD"}
    """
    user_data = _user_data(json_body(req))

    with session_scope() as db:
        user = UserService(db).create_user(user_data)
        return json_response(user.to_dict(), status_code=201)


@bp.route(route="users", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def update_user(req: func.HttpRequest) -> func.HttpResponse:
    """
    Update a user's profile.

    Body: {"id": int, "email": str, "login": str, "name": str, "birthday": "YYYY-MM-DD"}
    """
    body = json_body(req)
    require_fields(body, 'id')
    user_id = parse_id(body['id'], 'id')
    user_data = _user_data(body)

    with session_scope() as db:
        user = UserService(db).update_user(user_id, user_data)
        return json_response(user.to_dict())


@bp.route(route="users", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_users(req: func.HttpRequest) -> func.HttpResponse:
    """List all users."""
    with session_scope() as db:
        users = UserService(db).get_all_users()
        return json_response([user.to_dict() for user in users])


@bp.route(route="users/{user_id:int}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_user(req: func.HttpRequest) -> func.HttpResponse:
    """Get one user."""
    user_id = route_int(req, 'user_id')

    with session_scope() as db:
        user = UserService(db).get_user(user_id)
        return json_response(user.to_dict())


@bp.route(route="users/{user_id}/friends/{friend_id}", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def add_friend(req: func.HttpRequest) -> func.HttpResponse:
    """Send a friend request."""
    user_id = route_int(req, 'user_id')
    friend_id = route_int(req, 'friend_id')

    with session_scope() as db:
        FriendshipService(db).add_friend(user_id, friend_id)

    return empty_response()


@bp.route(route="users/{user_id}/friends/{friend_id}/confirm", methods=["PUT"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def confirm_friend(req: func.HttpRequest) -> func.HttpResponse:
    """Confirm a pending friend request."""
    user_id = route_int(req, 'user_id')
    friend_id = route_int(req, 'friend_id')

    with session_scope() as db:
        FriendshipService(db).confirm_friend(user_id, friend_id)

    return empty_response()


@bp.route(route="users/{user_id}/friends/{friend_id}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def remove_friend(req: func.HttpRequest) -> func.HttpResponse:
    """Remove a friend."""
    user_id = route_int(req, 'user_id')
    friend_id = route_int(req, 'friend_id')

    with session_scope() as db:
        FriendshipService(db).remove_friend(user_id, friend_id)

    return empty_response()


@bp.route(route="users/{user_id}/friends", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_friends(req: func.HttpRequest) -> func.HttpResponse:
    """
    Get a user's friends.

    Query Parameters:
        - status: PENDING or CONFIRMED (default: any)
    """
    user_id = route_int(req, 'user_id')

    status = None
    raw_status = req.params.get('status')
    if raw_status:
        try:
            status = FriendshipStatus(raw_status.upper())
        except ValueError:
            raise ValidationError("status must be PENDING or CONFIRMED")

    with session_scope() as db:
        friends = FriendshipService(db).get_friends(user_id, status)
        return json_response([friend.to_dict() for friend in friends])


@bp.route(route="users/{user_id}/friends/common/{other_id}", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_common_friends(req: func.HttpRequest) -> func.HttpResponse:
    """Get friends shared by two users."""
    user_id = route_int(req, 'user_id')
    other_id = route_int(req, 'other_id')

    with session_scope() as db:
        friends = FriendshipService(db).get_common_friends(user_id, other_id)
        return json_response([friend.to_dict() for friend in friends])


@bp.route(route="users/{user_id}/feed", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_user_feed(req: func.HttpRequest) -> func.HttpResponse:
    """Get a user's activity feed, oldest first."""
    user_id = route_int(req, 'user_id')

    with session_scope() as db:
        events = FeedService(db).get_user_feed(user_id)
        return json_response([event.to_dict() for event in events])


@bp.route(route="users/{user_id}/recommendations", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
@api_endpoint
def get_recommendations(req: func.HttpRequest) -> func.HttpResponse:
    """Get film recommendations for a user."""
    user_id = route_int(req, 'user_id')

    with session_scope() as db:
        films = RecommendationService(db).get_recommendations(user_id)
        return json_response([film.to_dict() for film in films])
