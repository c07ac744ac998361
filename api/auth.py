"""
Authentication blueprint:
- POST /login
- POST /refresh
- POST /revoke

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues one-hour access tokens (JWTs signed with HS256)
- Stores opaque 60-day refresh tokens in the DB so they can be revoked
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify

from api.state import account_service
from models.schemas.user import UserCredentialsSchema, LoginOutSchema, TokenOutSchema
from services.errors import BadRequestError, UnauthorizedError
from utils.security import AuthorizationHeaderError, get_bearer_token

bp = Blueprint("auth", __name__)

credentials_schema = UserCredentialsSchema()
login_out_schema = LoginOutSchema()
token_out_schema = TokenOutSchema()


@bp.post("/login")
def login():
    """
    Login: return the user with an access token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Incorrect email or password
    """
    payload = request.get_json(silent=True) or {}
    data = credentials_schema.load(payload)

    user, access_token, refresh_token = account_service().login(data["email"], data["password"])
    out = login_out_schema.dump(
        {
            "id": user.id,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "email": user.email,
            "is_chirpy_red": user.is_chirpy_red,
            "token": access_token,
            "refresh_token": refresh_token,
        }
    )
    return jsonify(out), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token (Authorization: Bearer) for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Missing, expired or revoked refresh token
    """
    try:
        token = get_bearer_token(request.headers)
    except AuthorizationHeaderError as e:
        raise UnauthorizedError("Couldn't find token") from e

    access_token = account_service().refresh(token)
    return jsonify(token_out_schema.dump({"token": access_token})), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token (Authorization: Bearer)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked
      400:
        description: Missing token
    """
    try:
        token = get_bearer_token(request.headers)
    except AuthorizationHeaderError as e:
        raise BadRequestError("Couldn't find token") from e

    account_service().revoke(token)
    return ("", 204)
