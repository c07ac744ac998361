"""
Per-process state shared by request handlers.

create_app() builds one ApiState and stores it in app.extensions; handlers
reach it through get_state() instead of module globals.
"""
from __future__ import annotations

from flask import current_app

from models import DBStorage
from services import AccountService, ChirpService
from utils.metrics import HitCounter

EXTENSION_KEY = "chirpy"


class ApiState:
    def __init__(self, storage: DBStorage, hits: HitCounter | None = None) -> None:
        self.storage = storage
        self.hits = hits or HitCounter()


def get_state() -> ApiState:
    return current_app.extensions[EXTENSION_KEY]


def account_service() -> AccountService:
    cfg = current_app.config
    return AccountService(
        get_state().storage,
        jwt_secret=cfg["JWT_SECRET"],
        access_token_expires=cfg["ACCESS_TOKEN_EXPIRES"],
        refresh_token_expires=cfg["REFRESH_TOKEN_EXPIRES"],
        jwt_issuer=cfg["JWT_ISSUER"],
        webhook_key=cfg["POLKA_KEY"],
    )


def chirp_service() -> ChirpService:
    cfg = current_app.config
    return ChirpService(
        get_state().storage,
        banned_words=cfg["PROFANE_WORDS"],
        max_length=cfg["CHIRP_MAX_LENGTH"],
    )
