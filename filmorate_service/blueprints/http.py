"""Request parsing and response helpers shared by the blueprints."""
import functools
import json
import logging
from contextlib import contextmanager
from datetime import date
from typing import Any, Iterator, List, Optional

import azure.functions as func
from sqlalchemy.orm import Session

from filmorate_service.exceptions import NotFoundError, ValidationError
from filmorate_service.models.database import SessionLocal

logger = logging.getLogger(__name__)


@contextmanager
def session_scope() -> Iterator[Session]:
    """One database session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def json_response(body: Any, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body, default=str),
        status_code=status_code,
        mimetype="application/json"
    )


def error_response(message: str, status_code: int) -> func.HttpResponse:
    return json_response({"error": message}, status_code=status_code)


def empty_response(status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(status_code=status_code)


def api_endpoint(handler):
    """Map domain errors to HTTP status codes: 404 not found, 400 invalid, 500 otherwise."""
    @functools.wraps(handler)
    def wrapper(req: func.HttpRequest) -> func.HttpResponse:
        try:
            return handler(req)
        except NotFoundError as e:
            return error_response(str(e), 404)
        except ValidationError as e:
            return error_response(str(e), 400)
        except Exception as e:
            logger.error(f"Error in {handler.__name__}: {str(e)}", exc_info=True)
            return error_response("Internal server error", 500)

    return wrapper


def route_int(req: func.HttpRequest, name: str) -> int:
    """Parse a required integer route parameter."""
    value = req.route_params.get(name)
    if not value:
        raise ValidationError(f"{name} is required")

    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def query_int(req: func.HttpRequest, name: str, required: bool = False) -> Optional[int]:
    """Parse an optional (or required) integer query parameter."""
    value = req.params.get(name)
    if value is None or value == "":
        if required:
            raise ValidationError(f"{name} is required")
        return None

    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def json_body(req: func.HttpRequest) -> dict:
    """Parse the request body as a JSON object."""
    try:
        body = req.get_json()
    except ValueError:
        raise ValidationError("Request body must be valid JSON")

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def require_fields(body: dict, *fields: str) -> None:
    missing = [field for field in fields if body.get(field) is None]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def parse_id(value, name: str) -> int:
    """Check that a JSON body value is an integer (booleans rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer")
    return value


def parse_date(value, name: str) -> Optional[date]:
    """Parse an optional ISO ``YYYY-MM-DD`` date from a JSON body."""
    if value is None:
        return None

    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a date in YYYY-MM-DD format")


def parse_id_list(value, name: str) -> List[int]:
    """Collect the ids of a list of ``{"id": int}`` objects, e.g. genres or directors."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{name} must be a list")

    ids = []
    for item in value:
        if not isinstance(item, dict) or 'id' not in item:
            raise ValidationError(f"Each entry of {name} must be an object with an id")
        ids.append(parse_id(item['id'], f"{name}.id"))
    return ids
