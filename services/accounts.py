"""
Account operations: registration, login, refresh/revoke, profile updates
and the payment provider's upgrade webhook.
"""
from __future__ import annotations

import hmac
import logging
from datetime import timedelta
from typing import Optional, Tuple

from models import DBStorage, RefreshToken, User
from models.base_model import utcnow
from services.base import BaseService
from services.errors import NotFoundError, UnauthorizedError
from utils.security import (
    InvalidTokenError,
    PasswordMismatchError,
    create_access_token,
    hash_password,
    make_refresh_token,
    validate_access_token,
    verify_password,
)

logger = logging.getLogger(__name__)

UPGRADE_EVENT = "user.upgraded"
LOGIN_FAILED = "Incorrect email or password"


class AccountService(BaseService):
    def __init__(
        self,
        storage: DBStorage,
        *,
        jwt_secret: str,
        access_token_expires: timedelta = timedelta(hours=1),
        refresh_token_expires: timedelta = timedelta(days=60),
        jwt_issuer: str = "chirpy",
        webhook_key: str = "",
    ) -> None:
        super().__init__(storage)
        self._jwt_secret = jwt_secret
        self._access_ttl = access_token_expires
        self._refresh_ttl = refresh_token_expires
        self._issuer = jwt_issuer
        self._webhook_key = webhook_key

    def _issue_access_token(self, user_id: str) -> str:
        return create_access_token(user_id, self._jwt_secret, self._access_ttl, issuer=self._issuer)

    def register(self, email: str, password: str) -> User:
        user = User(email=email, hashed_password=hash_password(password))
        self._storage.new(user)
        self._commit("Couldn't create user")
        logger.info("user %s registered", user.id)
        return user

    def login(self, email: str, password: str) -> Tuple[User, str, str]:
        """Return (user, access_token, refresh_token).

        Unknown email and wrong password fail with the same error.
        """
        user = self.session.query(User).filter(User.email == email).first()
        if user is None:
            logger.info("login failed: unknown email")
            raise UnauthorizedError(LOGIN_FAILED)
        try:
            verify_password(password, user.hashed_password)
        except PasswordMismatchError:
            logger.info("login failed for user %s", user.id)
            raise UnauthorizedError(LOGIN_FAILED) from None

        access_token = self._issue_access_token(user.id)
        refresh_token = RefreshToken(
            token=make_refresh_token(),
            user_id=user.id,
            expires_at=utcnow() + self._refresh_ttl,
            revoked_at=None,
        )
        self._storage.new(refresh_token)
        self._commit("Couldn't save refresh token")
        return user, access_token, refresh_token.token

    def _find_refresh_token(self, token: str) -> Optional[RefreshToken]:
        return self.session.query(RefreshToken).filter(RefreshToken.token == token).first()

    def refresh(self, token: str) -> str:
        """Exchange a live refresh token for a new access token. The refresh token is reused."""
        stored = self._find_refresh_token(token)
        if stored is None:
            raise UnauthorizedError("Couldn't find refresh token")
        if stored.revoked_at is not None:
            raise UnauthorizedError("Refresh token revoked")
        if not stored.is_usable(utcnow()):
            raise UnauthorizedError("Refresh token expired")
        return self._issue_access_token(stored.user_id)

    def revoke(self, token: str) -> None:
        """Mark the token revoked; repeating the call refreshes revoked_at."""
        stored = self._find_refresh_token(token)
        if stored is None:
            return
        now = utcnow()
        stored.revoked_at = now
        stored.updated_at = now
        self._commit("Couldn't revoke refresh token")

    def authenticate(self, access_token: str) -> str:
        """Return the id of the account an access token was issued to."""
        try:
            return validate_access_token(access_token, self._jwt_secret)
        except InvalidTokenError as exc:
            raise UnauthorizedError("Couldn't validate JWT") from exc

    def update_profile(self, user_id: str, email: str, password: str) -> User:
        user = self._storage.get(User, user_id)
        if user is None:
            raise UnauthorizedError("Couldn't find user")
        user.email = email
        user.hashed_password = hash_password(password)
        self._commit("Couldn't update user")
        return user

    def check_webhook_key(self, api_key: str) -> None:
        """Constant-time comparison with the configured key; an empty key rejects everything."""
        if not self._webhook_key or not hmac.compare_digest(
            api_key.encode("utf-8"), self._webhook_key.encode("utf-8")
        ):
            logger.warning("webhook rejected: bad api key")
            raise UnauthorizedError("Invalid API key")

    def apply_upgrade_webhook(self, api_key: str, event, user_id: Optional[str]) -> None:
        """
        Flag the account as Chirpy Red. Events other than user.upgraded are
        acknowledged and ignored.
        """
        self.check_webhook_key(api_key)

        if event != UPGRADE_EVENT:
            logger.debug("webhook event %r ignored", event)
            return

        user = self._storage.get(User, user_id) if user_id else None
        if user is None:
            raise NotFoundError("Couldn't find user")
        user.is_chirpy_red = True
        self._commit("Couldn't upgrade user")
        logger.info("user %s upgraded", user.id)
