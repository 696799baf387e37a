"""Data models shared by the reconciler and the presenters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AuditPhase(Enum):
    """Lifecycle of one audit run."""

    NOT_STARTED = "not-started"
    COLLECTING_BASE = "collecting-base"
    PRUNING_OR_MARKING = "pruning-or-marking"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class NoResults:
    """Returned instead of an empty set when a finished audit found nothing."""

    message: str

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.message


NO_OUT_OF_ALBUM_PHOTOS = NoResults("No out-of-album photos found")
NO_LEAKED_PRIVATE_PHOTOS = NoResults("No private photos in other albums found")
