from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from models import Chirp, DBStorage
from services.base import BaseService
from services.errors import ChirpTooLongError, ForbiddenError, NotFoundError, ValidationError
from utils.profanity import clean_body

logger = logging.getLogger(__name__)

MAX_CHIRP_LENGTH = 140
MAX_LIMIT = 100
SORT_ORDERS = ("asc", "desc")


class ChirpService(BaseService):
    """Create, list, fetch and delete chirps."""

    def __init__(self, storage: DBStorage, banned_words: Iterable[str],
                 max_length: int = MAX_CHIRP_LENGTH) -> None:
        super().__init__(storage)
        self._banned_words = tuple(banned_words)
        self._max_length = max_length

    def clean(self, body: str) -> str:
        """Length-check the raw body, then mask profanity."""
        # the raw body is measured; cleaning never changes acceptance
        if len(body) > self._max_length:
            raise ChirpTooLongError()
        return clean_body(body, self._banned_words)

    def create(self, body: str, author_id: str) -> Chirp:
        chirp = Chirp(body=self.clean(body), user_id=author_id)
        self._storage.new(chirp)
        self._commit("Couldn't create chirp")
        logger.debug("chirp %s created by %s", chirp.id, author_id)
        return chirp

    def list(self, author_id: Optional[str] = None, sort: str = "asc",
             page: Optional[int] = None, limit: Optional[int] = None) -> List[Chirp]:
        if sort not in SORT_ORDERS:
            raise ValidationError("sort must be 'asc' or 'desc'")

        query = self.session.query(Chirp)
        if author_id:
            query = query.filter(Chirp.user_id == author_id)
        order = Chirp.created_at.desc() if sort == "desc" else Chirp.created_at.asc()
        query = query.order_by(order)

        if limit is not None:
            limit = max(1, min(limit, MAX_LIMIT))
            page = max(page or 1, 1)
            query = query.offset((page - 1) * limit).limit(limit)
        return query.all()

    def get(self, chirp_id: str) -> Chirp:
        chirp = self._storage.get(Chirp, chirp_id)
        if chirp is None:
            raise NotFoundError("Couldn't get chirp")
        return chirp

    def delete(self, chirp_id: str, requesting_user_id: str) -> None:
        """Existence is checked before ownership."""
        chirp = self.get(chirp_id)
        if chirp.user_id != requesting_user_id:
            raise ForbiddenError("You can't delete this chirp")
        self._storage.delete(chirp)
        self._commit("Couldn't delete chirp")
