"""Outcomes of remote writes and session loads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from blockbuild.systems.sync.documents import DocumentShape


class SyncErrorKind(Enum):
    """Why a remote write failed."""

    WRITE_FAILURE = auto()  # set/update of a regular action failed
    MIGRATION_FAILURE = auto()  # write of a migrated or repaired shape failed
    FETCH_FAILURE = auto()  # the user document could not be read at session start


@dataclass(frozen=True)
class WriteResult:
    """Result of one scoped write.

    Attributes:
        fields: Field paths the write covered (e.g. ("inventory", "maps.default")).
        error_kind: None on success, otherwise the failure category.
        message: Error text for logging and notifications.
    """

    fields: tuple[str, ...]
    error_kind: SyncErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        """True if the write reached the store."""
        return self.error_kind is None


@dataclass(frozen=True)
class LoadOutcome:
    """Result of loading the user document at session start.

    Attributes:
        shape: Shape detected on the fetched document.
        write: The create/repair/migration write issued, or None if none was needed.
            After a failed fetch this holds the FETCH_FAILURE result.
    """

    shape: DocumentShape
    write: WriteResult | None = None
