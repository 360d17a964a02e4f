"""Key/value access to the persisted state blobs."""

import logging
from datetime import datetime
from typing import Optional

from .connection import session_scope
from .models import AppStateEntry

logger = logging.getLogger(__name__)


class StateStorage:
    """Reads and writes whole JSON blobs by key.

    Every write replaces the stored text for its key in one transaction.
    """

    def read(self, key: str) -> Optional[str]:
        """Return the stored text for key, or None if nothing is stored."""
        with session_scope() as session:
            entry = session.get(AppStateEntry, key)
            return entry.value if entry is not None else None

    def write(self, key: str, value: str):
        """Insert or replace the stored text for key."""
        with session_scope() as session:
            entry = session.get(AppStateEntry, key)
            if entry is None:
                session.add(AppStateEntry(key=key, value=value))
            else:
                entry.value = value
                entry.updated_date = datetime.now()
        logger.debug("Wrote state '%s' (%d chars)", key, len(value))


class MemoryStorage:
    """In-process storage with the same interface, for running without a database."""

    def __init__(self):
        self._values = {}

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def write(self, key: str, value: str):
        self._values[key] = value
