"""
Action and Receipt models — the invocation contract.

An Action asks an adapter to run one alias with forwarded arguments.
A Receipt is what comes back: the argv that ran (or would have run),
the tool's exit code, and whether the tool was missing. Never exceptions.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

Status = Literal["ok", "skipped", "failed"]


class Action(BaseModel):
    """A requested alias invocation.

    ``args`` are the user's forwarded arguments, kept exactly as given.
    """

    id: str                         # alias name
    adapter: str = "shim"
    args: list[str] = Field(default_factory=list)
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """What an adapter reports back.

    ``status`` is ``skipped`` when nothing ran (missing tool, dry run).
    ``metadata`` keys used across the code base:

        argv          full command line that ran or would run
        return_code   the tool's exit code, None if it never ran
        spawned       True once a process was actually started
        missing       True when no candidate executable was found
        tool          name of the tool behind the alias
        install_hint  how to get a missing tool
    """

    adapter: str
    action_id: str
    status: Status = "ok"
    duration_ms: int = 0
    output: str = ""
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def return_code(self) -> int | None:
        """Exit code of the invoked tool, or None if nothing ran."""
        return self.metadata.get("return_code")

    @property
    def missing(self) -> bool:
        """Whether the tool behind the alias was not installed."""
        return bool(self.metadata.get("missing"))

    # ── Constructors ────────────────────────────────────────────

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, adapter: str, action_id: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Nothing ran; ``reason`` becomes the output."""
        return cls(adapter=adapter, action_id=action_id, status="skipped", output=reason, **kwargs)
