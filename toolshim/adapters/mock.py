"""
Mock adapter — test double for alias invocations.

Records every context it receives and answers with a success receipt
(exit code 0) unless told otherwise per alias.
"""

from __future__ import annotations

from toolshim.adapters.base import Adapter, ExecutionContext
from toolshim.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing."""

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[ExecutionContext]:
        """All execution contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific alias."""
        self._responses[action_id] = receipt

    def set_exit_code(self, action_id: str, code: int) -> None:
        """Make an alias look like its tool exited with ``code``."""
        self._responses[action_id] = Receipt(
            adapter=self._name,
            action_id=action_id,
            status="ok" if code == 0 else "failed",
            error=None if code == 0 else f"exited with code {code}",
            metadata={"return_code": code, "spawned": True},
        )

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if context.action.id in self._responses:
            return self._responses[context.action.id]

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output=self._default_output,
            metadata={
                "mock": True,
                "spawned": True,
                "return_code": 0,
                "argv": list(context.action.args),
            },
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
