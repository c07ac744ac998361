"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT access token creation/validation via PyJWT
- opaque refresh token generation
- Authorization header parsing (Bearer / ApiKey)
"""
from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Mapping

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

ph = PasswordHasher()

JWT_ALGORITHM = "HS256"
DEFAULT_ISSUER = "chirpy"

BEARER_PREFIX = "Bearer "
API_KEY_PREFIX = "ApiKey "


class HashFailure(Exception):
    """Raised when the password hasher itself fails."""


class PasswordMismatchError(Exception):
    """Password does not match the stored hash (or the hash is unusable)."""


class InvalidTokenError(Exception):
    """Access token failed validation."""


class EntropyFailure(Exception):
    """The system random source could not produce bytes."""


class AuthorizationHeaderError(Exception):
    pass


class MissingHeaderError(AuthorizationHeaderError):
    pass


class MissingPrefixError(AuthorizationHeaderError):
    pass


class EmptyTokenError(AuthorizationHeaderError):
    pass


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    try:
        return ph.hash(password)
    except HashingError as exc:
        raise HashFailure("could not hash password") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against an argon2 hash.

    Every failure raises the same PasswordMismatchError so callers cannot
    tell a wrong password from a corrupt hash.
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError) as exc:
        raise PasswordMismatchError("password does not match") from exc


def _now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(subject: str, secret: str, expires_in: timedelta,
                        issuer: str = DEFAULT_ISSUER) -> str:
    """Build and sign an HS256 access token for `subject`."""
    now = _now()
    payload = {
        "iss": issuer,
        "sub": str(subject),
        "iat": now,
        "nbf": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def validate_access_token(token: str, secret: str) -> str:
    """
    Decode and validate an access token, returning its subject.
    Only HS256 is accepted; exp, iat, nbf and sub must be present.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            leeway=0,
            options={"require": ["exp", "iat", "nbf", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(f"Invalid token: {exc}") from exc

    subject = decoded.get("sub")
    if not subject:
        raise InvalidTokenError("Invalid token: empty subject")
    return subject


def make_refresh_token() -> str:
    """32 random bytes, hex encoded (64 characters)."""
    try:
        return secrets.token_hex(32)
    except (NotImplementedError, OSError) as exc:
        raise EntropyFailure("random source unavailable") from exc


def get_authorization_token(headers: Mapping[str, str], prefix: str) -> str:
    """
    Return the credential from the Authorization header.
    `prefix` must match exactly, including its trailing space.
    """
    auth = headers.get("Authorization", "")
    if not auth:
        raise MissingHeaderError("Authorization header not found")
    if not auth.startswith(prefix):
        raise MissingPrefixError(f"Authorization header must start with '{prefix}'")
    token = auth[len(prefix):].strip()
    if not token:
        raise EmptyTokenError("Authorization token is empty")
    return token


def get_bearer_token(headers: Mapping[str, str]) -> str:
    return get_authorization_token(headers, BEARER_PREFIX)


def get_api_key(headers: Mapping[str, str]) -> str:
    return get_authorization_token(headers, API_KEY_PREFIX)
