from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.security import (
    EmptyTokenError,
    InvalidTokenError,
    MissingHeaderError,
    MissingPrefixError,
    PasswordMismatchError,
    create_access_token,
    get_api_key,
    get_authorization_token,
    get_bearer_token,
    hash_password,
    make_refresh_token,
    validate_access_token,
    verify_password,
)

SECRET = "testing-secret-token"


@pytest.fixture(scope="module")
def hashes():
    return {
        "passwordtest123": hash_password("passwordtest123"),
        "secondpasswordtest098": hash_password("secondpasswordtest098"),
    }


@pytest.mark.parametrize(
    "password, hash_of",
    [
        ("passwordtest123", "passwordtest123"),
        ("secondpasswordtest098", "secondpasswordtest098"),
    ],
)
def test_verify_password_accepts_matching_password(hashes, password, hash_of):
    assert verify_password(password, hashes[hash_of])


@pytest.mark.parametrize(
    "password, hash_of",
    [
        ("badpassword", "passwordtest123"),
        ("", "secondpasswordtest098"),
        ("passwordtest123", "secondpasswordtest098"),
    ],
)
def test_verify_password_rejects_other_password(hashes, password, hash_of):
    with pytest.raises(PasswordMismatchError):
        verify_password(password, hashes[hash_of])


def test_verify_password_malformed_hash_is_a_mismatch():
    with pytest.raises(PasswordMismatchError):
        verify_password("passwordtest123", "wronghash")


def test_hash_password_salts_each_hash():
    assert hash_password("same") != hash_password("same")


def test_access_token_roundtrip():
    user_id = str(uuid.uuid4())
    token = create_access_token(user_id, SECRET, timedelta(hours=1))
    assert validate_access_token(token, SECRET) == user_id


def test_access_token_claims():
    token = create_access_token("abc", SECRET, timedelta(hours=1))
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["iss"] == "chirpy"
    assert claims["nbf"] == claims["iat"]
    assert claims["exp"] - claims["iat"] == 3600


def test_access_token_rejects_garbage():
    with pytest.raises(InvalidTokenError):
        validate_access_token("not.a.valid.token", SECRET)


def test_access_token_rejects_wrong_secret():
    token = create_access_token(str(uuid.uuid4()), SECRET, timedelta(hours=1))
    with pytest.raises(InvalidTokenError):
        validate_access_token(token, "wrong-secret")


def test_access_token_rejects_expired():
    token = create_access_token(str(uuid.uuid4()), SECRET, timedelta(seconds=-1))
    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


def test_access_token_requires_exp():
    now = datetime.now(timezone.utc)
    token = jwt.encode({"sub": "abc", "iat": now, "nbf": now}, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


def test_access_token_rejects_other_algorithm():
    now = datetime.now(timezone.utc)
    claims = {"sub": "abc", "iat": now, "nbf": now, "exp": now + timedelta(hours=1)}
    token = jwt.encode(claims, SECRET, algorithm="HS512")
    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


def test_access_token_rejects_not_yet_valid():
    now = datetime.now(timezone.utc)
    claims = {
        "sub": "abc",
        "iat": now,
        "nbf": now + timedelta(minutes=5),
        "exp": now + timedelta(hours=1),
    }
    token = jwt.encode(claims, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        validate_access_token(token, SECRET)


def test_make_refresh_token():
    token = make_refresh_token()
    assert len(token) == 64
    int(token, 16)
    assert token != make_refresh_token()


@pytest.mark.parametrize(
    "headers, expected",
    [
        ({"Authorization": "Bearer mytoken123"}, "mytoken123"),
        ({"Authorization": "Bearer   padded  "}, "padded"),
    ],
)
def test_get_bearer_token(headers, expected):
    assert get_bearer_token(headers) == expected


@pytest.mark.parametrize(
    "headers, error",
    [
        ({}, MissingHeaderError),
        ({"Authorization": ""}, MissingHeaderError),
        ({"Authorization": "Basic abcdef"}, MissingPrefixError),
        ({"Authorization": "bearer abcdef"}, MissingPrefixError),
        ({"Authorization": "Bearer "}, EmptyTokenError),
        ({"Authorization": "Bearer  "}, EmptyTokenError),
    ],
)
def test_get_bearer_token_errors(headers, error):
    with pytest.raises(error):
        get_bearer_token(headers)


def test_get_api_key():
    assert get_api_key({"Authorization": "ApiKey f271c81f"}) == "f271c81f"
    with pytest.raises(MissingPrefixError):
        get_api_key({"Authorization": "Bearer f271c81f"})


def test_custom_prefix():
    assert get_authorization_token({"Authorization": "Token xyz"}, "Token ") == "xyz"
