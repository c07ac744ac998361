import logging

from flask import Blueprint, current_app, abort

from api.health import PLAIN_TEXT
from api.state import get_state
from models import Chirp, RefreshToken, User

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags:
      - Admin
    produces:
      - text/plain
    responses:
      200:
        description: Hit count
    """
    hits = get_state().hits.value
    body = f"Welcome, Chirpy Admin\nChirpy has been visited {hits} times!"
    return body, 200, PLAIN_TEXT


@bp.post("/reset")
def reset():
    """
    Reset the hit counter and delete every user (PLATFORM=dev only)
    ---
    tags:
      - Admin
    responses:
      200:
        description: Reset done
      403:
        description: Not a dev deployment
    """
    if current_app.config.get("PLATFORM") != "dev":
        abort(403, description="Reset is only allowed in dev environment")

    state = get_state()
    state.hits.reset()
    # children first, for databases without ON DELETE CASCADE
    for cls in (RefreshToken, Chirp, User):
        state.storage.delete_all(cls)
    state.storage.save()
    logger.warning("admin reset: hit counter zeroed, all users deleted")
    return "Hit count reset to 0", 200, PLAIN_TEXT
