"""Best-effort recording of contributor notes."""

import logging
from dataclasses import dataclass
from typing import Callable

from ..errors import RecorderError
from ..github.models import ProfileRecord
from .models import build_note
from .store import MemoryStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordOutcome:
    """Whether a note write completed, and why not if it didn't."""

    stored: bool
    error: str | None = None


class MemoryRecorder:
    """Writes contributor notes without ever failing the caller.

    The store is built through `store_factory` on every write and closed
    afterwards, so errors while opening the database are isolated as well.
    """

    def __init__(self, store_factory: Callable[[], MemoryStore]) -> None:
        self._store_factory = store_factory

    def try_record(
        self, profile: ProfileRecord, issue_number: int | None = None
    ) -> RecordOutcome:
        """Write a note for `profile` and report the outcome."""
        note = build_note(profile, issue_number)

        try:
            store = self._store_factory()
            try:
                store.store(information=note.information, tags=note.tags_csv)
            finally:
                store.close()
        except Exception as e:
            error = RecorderError(f"Failed to store contributor memory: {e}")
            logger.warning("%s", error)
            return RecordOutcome(stored=False, error=str(error))

        return RecordOutcome(stored=True)

    def record(self, profile: ProfileRecord, issue_number: int | None = None) -> bool:
        """Write a note for `profile`. Returns False if the write failed."""
        return self.try_record(profile, issue_number).stored
