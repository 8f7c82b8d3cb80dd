"""Memory module for contributor notes."""

from .models import MemoryNote, StoredNote, build_note
from .recorder import MemoryRecorder, RecordOutcome
from .store import MemoryStore, open_store

__all__ = [
    "MemoryNote",
    "MemoryRecorder",
    "MemoryStore",
    "RecordOutcome",
    "StoredNote",
    "build_note",
    "open_store",
]
