from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import DBStorage
from services.errors import ConflictError, PersistenceError

logger = logging.getLogger(__name__)


class BaseService:
    def __init__(self, storage: DBStorage) -> None:
        self._storage = storage

    @property
    def session(self):
        return self._storage.get_session()

    def _commit(self, conflict_message: str = "Conflict") -> None:
        """Commit the unit of work; DBStorage.save() rolls back on failure."""
        try:
            self._storage.save()
        except IntegrityError as exc:
            logger.warning("integrity error: %s", exc.orig)
            raise ConflictError(conflict_message) from exc
        except SQLAlchemyError as exc:
            logger.exception("database error")
            raise PersistenceError() from exc
