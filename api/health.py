from flask import Blueprint

bp = Blueprint("health", __name__)

PLAIN_TEXT = {"Content-Type": "text/plain; charset=utf-8"}


@bp.get("/healthz")
def health():
    """
    Readiness check
    ---
    tags:
      - Health
    produces:
      - text/plain
    responses:
      200:
        description: API is up
    """
    return "OK", 200, PLAIN_TEXT
