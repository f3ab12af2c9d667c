"""
Adapter base — the protocol contract between use cases and tools.

Use cases never spawn processes themselves: they hand an Action to an
adapter through the AdapterRegistry and get a Receipt back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from toolshim.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    cwd: str | None = None          # None = inherit the caller's cwd
    dry_run: bool = False
    params: dict[str, Any] = Field(default_factory=dict)


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shim')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this adapter can run at all. Fast, never raises."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def describe(self, context: ExecutionContext) -> Receipt:
        """Dry-run: report what execute() would do without doing it."""
        return Receipt.skip(
            adapter=self.name,
            action_id=context.action.id,
            reason=f"[dry-run] Would execute {self.name}:{context.action.id}",
            metadata={"dry_run": True},
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
