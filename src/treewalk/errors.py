"""Exceptions raised by treewalk.

Boundary conditions (stepping past either end, undo with an empty history)
are reported through boolean return values and never raise. The types here
cover contract violations and bad configuration only.
"""

from __future__ import annotations

import os
from typing import Iterable

from pydantic import ValidationError


class TreewalkError(RuntimeError):
    """Base class for treewalk errors."""


class StackUnderflowError(TreewalkError):
    """A POP step was applied while the simulated call stack was empty."""

    def __init__(self, step_index: int):
        self.step_index = step_index
        super().__init__(f"Cannot pop an empty call stack at step {step_index}")


class SchedulerUnavailableError(TreewalkError):
    """Auto-play was requested without a scheduler or a running event loop."""


class SettingsError(TreewalkError):
    """Wraps settings failures with file path context."""

    def __init__(self, file_path: str, message: str, *, cause: Exception | None = None):
        self.file_path = file_path
        self.message = message
        self.cause = cause
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        path = self._relative_path(self.file_path)
        base = f"{self.message} ({path})"
        if isinstance(self.cause, ValidationError):
            detail = self._format_validation_errors(self.cause.errors())
            return f"{base}: {detail}"
        if self.cause:
            return f"{base}: {self.cause}"
        return base

    @staticmethod
    def _relative_path(path: str) -> str:
        try:
            return os.path.relpath(path)
        except ValueError:  # pragma: no cover - different drive on Windows
            return path

    @staticmethod
    def _format_validation_errors(errors: Iterable[dict]) -> str:
        error_list = list(errors)
        snippets = []
        for err in error_list[:3]:
            loc = ".".join(str(entry) for entry in err.get("loc", [])) or "<root>"
            msg = err.get("msg") or err.get("type") or "validation error"
            snippets.append(f"{loc}: {msg}")
        remaining = len(error_list) - len(snippets)
        if remaining > 0:
            snippets.append(f"... ({remaining} more)")
        return "; ".join(snippets)

    def __str__(self) -> str:
        return self._build_message()


__all__ = [
    "TreewalkError",
    "StackUnderflowError",
    "SchedulerUnavailableError",
    "SettingsError",
]
