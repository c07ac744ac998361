from __future__ import annotations
from functools import wraps
from flask import request, g

from api.state import account_service
from services.errors import UnauthorizedError
from utils.security import AuthorizationHeaderError, get_bearer_token


def jwt_required():
    """
    Require a valid access token in `Authorization: Bearer <token>`.
    The token subject is stored on g.current_user_id; no database lookup.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                token = get_bearer_token(request.headers)
            except AuthorizationHeaderError as e:
                raise UnauthorizedError(str(e)) from e

            g.current_user_id = account_service().authenticate(token)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
