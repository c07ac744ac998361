from __future__ import annotations

from flask import Blueprint, request, jsonify, g

from api.state import account_service
from models.schemas.user import UserCredentialsSchema, UserOutSchema
from utils.decorators import jwt_required

bp = Blueprint("users", __name__)

credentials_schema = UserCredentialsSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def create_user():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      500:
        description: Couldn't create user (e.g. email taken)
    """
    payload = request.get_json(silent=True) or {}
    data = credentials_schema.load(payload)

    user = account_service().register(data["email"], data["password"])
    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Update the email and password of the authenticated user.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = credentials_schema.load(payload)

    user = account_service().update_profile(g.current_user_id, data["email"], data["password"])
    return jsonify(user_out_schema.dump(user)), 200
