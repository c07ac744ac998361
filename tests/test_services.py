from __future__ import annotations

import threading
import uuid
from datetime import timedelta

import pytest

from api.state import account_service, chirp_service, get_state
from models import RefreshToken
from services.errors import (
    ChirpTooLongError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from utils.metrics import HitCounter


@pytest.fixture()
def ctx(app):
    with app.app_context():
        yield


def test_register_and_login(ctx):
    accounts = account_service()
    user = accounts.register("lydia@example.com", "pw")
    same, access, refresh = accounts.login("lydia@example.com", "pw")
    assert same.id == user.id
    assert accounts.authenticate(access) == user.id
    assert accounts.refresh(refresh)


def test_register_duplicate_is_conflict(ctx):
    accounts = account_service()
    accounts.register("todd@example.com", "pw")
    with pytest.raises(ConflictError):
        accounts.register("todd@example.com", "pw")


def test_authenticate_rejects_expired_token(app, ctx):
    app.config["ACCESS_TOKEN_EXPIRES"] = timedelta(seconds=-1)
    accounts = account_service()
    accounts.register("hank@example.com", "pw")
    _, access, _ = accounts.login("hank@example.com", "pw")
    with pytest.raises(UnauthorizedError):
        accounts.authenticate(access)


def test_revoke_reaffirms_revoked_at(ctx):
    accounts = account_service()
    accounts.register("marie@example.com", "pw")
    _, _, refresh = accounts.login("marie@example.com", "pw")

    accounts.revoke(refresh)
    session = get_state().storage.get_session()
    first = session.query(RefreshToken).filter(RefreshToken.token == refresh).one().revoked_at
    accounts.revoke(refresh)
    second = session.query(RefreshToken).filter(RefreshToken.token == refresh).one().revoked_at
    assert first is not None and second >= first

    with pytest.raises(UnauthorizedError):
        accounts.refresh(refresh)


def test_revoke_unknown_token_is_a_noop(ctx):
    account_service().revoke("0" * 64)


def test_update_profile_for_missing_account(ctx):
    with pytest.raises(UnauthorizedError):
        account_service().update_profile(str(uuid.uuid4()), "ghost@example.com", "pw")


def test_chirp_delete_checks_existence_before_ownership(ctx):
    accounts = account_service()
    chirps = chirp_service()
    owner = accounts.register("owner@example.com", "pw")
    other = accounts.register("other@example.com", "pw")

    with pytest.raises(NotFoundError):
        chirps.delete(str(uuid.uuid4()), other.id)

    chirp = chirps.create("mine", owner.id)
    with pytest.raises(ForbiddenError):
        chirps.delete(chirp.id, other.id)
    assert chirps.get(chirp.id).id == chirp.id

    chirps.delete(chirp.id, owner.id)
    with pytest.raises(NotFoundError):
        chirps.get(chirp.id)


def test_chirp_length_is_measured_before_cleaning(ctx):
    owner = account_service().register("len@example.com", "pw")
    chirps = chirp_service()
    # cleaning would shorten this below the limit, it is still rejected
    body = ("fornax " * 21)[:141]
    assert len(body) == 141
    with pytest.raises(ChirpTooLongError):
        chirps.create(body, owner.id)
    with pytest.raises(ChirpTooLongError):
        chirps.clean(body)
    assert chirps.clean("fornax here") == "**** here"


def test_webhook_key_is_checked_before_the_event(ctx):
    accounts = account_service()
    with pytest.raises(UnauthorizedError):
        accounts.check_webhook_key("wrong")
    with pytest.raises(UnauthorizedError):
        accounts.apply_upgrade_webhook("wrong", "user.created", None)
    accounts.apply_upgrade_webhook("f271c81ff7084ee5b99a5091b42d486e", "user.created", None)


def test_hit_counter_is_thread_safe():
    counter = HitCounter()

    def hit():
        for _ in range(1000):
            counter.increment()

    threads = [threading.Thread(target=hit) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value == 8000

    counter.reset()
    assert counter.value == 0
