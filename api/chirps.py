from __future__ import annotations

import uuid
from typing import Optional, Tuple

from flask import Blueprint, request, jsonify, abort, g

from api.state import chirp_service
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)


def parse_uuid(value: str, name: str) -> str:
    try:
        return str(uuid.UUID(value))
    except ValueError:
        abort(400, description=f"Invalid {name}")


def parse_pagination() -> Tuple[Optional[int], Optional[int]]:
    """page/limit are optional; without limit every chirp is returned."""
    if "limit" not in request.args and "page" not in request.args:
        return None, None
    try:
        page = int(request.args.get("page", "1"))
        limit = int(request.args.get("limit", "20"))
        return page, limit
    except ValueError:
        abort(400, description="page and limit must be integers")


@bp.post("/validate_chirp")
def validate_chirp():
    """
    Check a chirp without saving it; returns the cleaned body
    ---
    tags:
      - Chirps
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      200:
        description: Cleaned body
      400:
        description: Chirp is too long
    """
    data = chirp_create_schema.load(request.get_json(silent=True) or {})
    return jsonify({"cleaned_body": chirp_service().clean(data["body"])}), 200


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp (at most 140 characters; profanity is masked)
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201:
        description: Created
      400:
        description: Chirp is too long
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = chirp_create_schema.load(payload)

    chirp = chirp_service().create(data["body"], g.current_user_id)
    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, oldest first unless sort=desc
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        default: asc
      - in: query
        name: page
        type: integer
      - in: query
        name: limit
        type: integer
    responses:
      200:
        description: List of chirps
      400:
        description: Invalid author_id, sort or pagination
    """
    author_id = request.args.get("author_id")
    if author_id:
        author_id = parse_uuid(author_id, "author_id")
    sort = request.args.get("sort", "asc")
    page, limit = parse_pagination()

    rows = chirp_service().list(author_id=author_id, sort=sort, page=page, limit=limit)
    return jsonify(chirps_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get a single chirp by id
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200:
        description: Chirp found
      404:
        description: Not found
    """
    chirp = chirp_service().get(parse_uuid(chirp_id, "chirp id"))
    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete one of your own chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204:
        description: Deleted
      403:
        description: Not the author
      404:
        description: Not found
    """
    chirp_service().delete(parse_uuid(chirp_id, "chirp id"), g.current_user_id)
    return ("", 204)
