from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


class RepositoryBase:
    """Shared session handling for repositories.

    Every public repository method takes an optional ``db`` session. When given,
    the call joins that unit of work and leaves commit/rollback to its owner;
    otherwise the repository opens, commits and closes its own session.
    """

    def __init__(self, db_session_factory):
        self._db_session_factory = db_session_factory

    @contextmanager
    def _scope(self, db: Session | None) -> Iterator[Session]:
        if db is not None:
            yield db
            return
        with self._db_session_factory() as own:
            yield own
