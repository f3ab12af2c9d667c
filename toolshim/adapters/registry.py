"""
Adapter registry — where alias invocations are dispatched.

The run use case never calls an adapter directly: it hands an Action to
``AdapterRegistry.execute_action`` and always gets a Receipt back, even
when the adapter is unknown, rejects the alias or blows up.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from toolshim.adapters.base import Adapter, ExecutionContext
from toolshim.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters keyed by name, plus a mock switch for tests.

    In mock mode every action goes to the mock adapter given to
    ``set_mock_mode`` or, without one, gets a canned exit-code-0 receipt.
    Nothing is spawned either way.
    """

    def __init__(self, mock_mode: bool = False):
        self._by_name: dict[str, Adapter] = {}
        self._mock_mode = mock_mode
        self._mock: Adapter | None = None

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool, mock_adapter: Adapter | None = None) -> None:
        """Route every action to ``mock_adapter`` (or a canned success)."""
        self._mock_mode = enabled
        self._mock = mock_adapter

    def register(self, adapter: Adapter) -> None:
        """Add an adapter. A second one with the same name replaces the first."""
        if adapter.name in self._by_name:
            logger.warning("Replacing adapter %s", adapter.name)
        self._by_name[adapter.name] = adapter
        logger.debug("Registered adapter %s", adapter.name)

    def unregister(self, name: str) -> None:
        self._by_name.pop(name, None)

    def get(self, name: str) -> Adapter | None:
        return self._by_name.get(name)

    def list_adapters(self) -> list[str]:
        return list(self._by_name)

    def adapter_status(self) -> dict[str, dict[str, Any]]:
        """Availability of each registered adapter (a failing probe counts as unavailable)."""
        report: dict[str, dict[str, Any]] = {}
        for name, adapter in self._by_name.items():
            try:
                up = adapter.is_available()
            except Exception as e:
                logger.debug("Availability probe for %s failed: %s", name, e)
                up = False
            report[name] = {
                "name": name,
                "available": up,
                "type": type(adapter).__name__,
            }
        return report

    # ── Dispatch ────────────────────────────────────────────────

    def _pick(self, action: Action) -> Adapter | None:
        if self._mock_mode:
            return self._mock
        return self._by_name.get(action.adapter)

    @staticmethod
    def _refuse(action: Action, error: str) -> Receipt:
        return Receipt.failure(adapter=action.adapter, action_id=action.id, error=error)

    def execute_action(
        self,
        action: Action,
        cwd: str | None = None,
        dry_run: bool = False,
    ) -> Receipt:
        """Run (or, with ``dry_run``, describe) one alias invocation.

        Never raises. Validation errors and adapter exceptions become
        failed receipts; ``duration_ms`` covers validation and execution.
        """
        started = time.monotonic()

        if self._mock_mode and self._mock is None:
            return Receipt.success(
                adapter=action.adapter,
                action_id=action.id,
                output=f"[mock] {action.adapter}:{action.id} executed",
                metadata={"mock": True, "dry_run": dry_run, "return_code": 0},
            )

        adapter = self._pick(action)
        if adapter is None:
            return self._refuse(action, f"No adapter registered for '{action.adapter}'")

        context = ExecutionContext(action=action, cwd=cwd, dry_run=dry_run, params=action.params)

        try:
            valid, reason = adapter.validate(context)
        except Exception as e:
            return self._refuse(action, f"Validation error: {e}")
        if not valid:
            return self._refuse(action, reason)

        try:
            receipt = adapter.describe(context) if dry_run else adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised on %s: %s", adapter.name, action.id, e)
            receipt = self._refuse(action, f"Unexpected error: {e}")

        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        return receipt
