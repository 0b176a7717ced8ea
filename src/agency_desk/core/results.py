# src/agency_desk/core/results.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class ActionResult:
    """
    Outcome of a user-facing write action.

    Write actions never raise for store/API failures; the caller decides how
    to present `message` / `error` to the user.
    """

    success: bool
    message: str | None = None
    error: str | None = None
    id: str | None = None
    link: str | None = None

    @classmethod
    def ok(cls, message: str | None = None, **extra: Any) -> ActionResult:
        return cls(success=True, message=message, **extra)

    @classmethod
    def fail(cls, error: str, message: str | None = None) -> ActionResult:
        return cls(success=False, error=error, message=message)

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        for key in ("message", "error", "id", "link"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out
