"""
ShimState — what toolshim remembers between shell sessions.

Serialized to ``state.json`` in the cache directory. It only holds
update-check bookkeeping; command-existence results are per-process
and never persisted.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class UpdateCheckRecord(BaseModel):
    """Outcome of the most recent update check."""

    checked_at: str | None = None
    repo: str = ""
    available: bool = False
    behind: int = 0
    error: str | None = None


class ShimState(BaseModel):
    """Root state model. Disposable: delete it and nothing breaks."""

    schema_version: int = 1

    created_at: str = Field(default_factory=_now_iso)
    updated_at: str = Field(default_factory=_now_iso)

    last_update_check: UpdateCheckRecord = Field(default_factory=UpdateCheckRecord)

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def updates_available(self) -> bool:
        """Whether the last recorded check found upstream commits."""
        return self.last_update_check.available

    @property
    def update_error(self) -> str | None:
        return self.last_update_check.error

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = _now_iso()

    def seconds_since_update_check(self, now: datetime | None = None) -> float | None:
        """Seconds since the last recorded check, or None if never checked."""
        checked_at = self.last_update_check.checked_at
        if not checked_at:
            return None
        try:
            then = datetime.fromisoformat(checked_at)
        except ValueError:
            return None
        if then.tzinfo is None:
            then = then.replace(tzinfo=UTC)
        return ((now or datetime.now(UTC)) - then).total_seconds()
