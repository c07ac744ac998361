from flask import Blueprint, current_app, send_from_directory

from api.state import get_state

bp = Blueprint("fileserver", __name__)


@bp.before_request
def count_hit():
    get_state().hits.increment()


@bp.get("/")
@bp.get("/<path:filename>")
def serve(filename: str = "index.html"):
    return send_from_directory(current_app.config["FILESERVER_ROOT"], filename)
