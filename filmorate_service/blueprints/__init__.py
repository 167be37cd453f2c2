"""Azure Functions blueprints"""

from filmorate_service.blueprints.films_bp import bp as films_blueprint
from filmorate_service.blueprints.reviews_bp import bp as reviews_blueprint
from filmorate_service.blueprints.users_bp import bp as users_blueprint

__all__ = [
    "films_blueprint",
    "reviews_blueprint",
    "users_blueprint",
]
