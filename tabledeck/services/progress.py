from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Export progress surface: percentage (0-100), label and an error flag.

- Listeners receive a ProgressUpdate on every change (UI status line, tests)
- A single tqdm bar mirrors the percentage, only when stdout is a TTY, so CI logs
  are not filled with ANSI control sequences
"""

__all__ = [
    "ExportProgress",
    "ProgressUpdate",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check if TTY output is enabled.

    Returns:
        True if stdout is a TTY and the progress bar should be displayed, False otherwise
    """
    return sys.stdout.isatty()


@dataclass(frozen=True)
class ProgressUpdate:
    """One progress checkpoint as seen by listeners."""
    percent: int
    label: str
    error: bool = False


ProgressListener = Callable[[ProgressUpdate], None]


class ExportProgress:
    """Progress reporter for a deck export.

    Percentages are clamped to 0-100. The bar itself never moves backwards; a failure
    resets the reported percentage to 0 with the error flag set, like an idle status.
    """

    IDLE_LABEL = "Idle"

    def __init__(self, *, description: str = "Exporting deck") -> None:
        """Initialize progress reporter.

        Args:
            description: Description for the progress bar
        """
        self.description = description
        self.percent = 0
        self.label = self.IDLE_LABEL
        self.error = False
        self._listeners: list[ProgressListener] = []

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=100,
                desc=description,
                unit="%",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def subscribe(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def _emit(self) -> None:
        update = ProgressUpdate(percent=self.percent, label=self.label, error=self.error)
        for listener in self._listeners:
            listener(update)

    def update(self, percent: float, label: str) -> None:
        """Report a checkpoint.

        Args:
            percent: Completion percentage, clamped to 0-100
            label: Human-readable status
        """
        self.percent = int(max(0, min(100, round(percent))))
        self.label = label
        self.error = False

        if self.enabled and self.pbar is not None:
            delta = self.percent - self.pbar.n
            if delta > 0:
                self.pbar.update(delta)
            self.pbar.set_description(f"{self.description} ({label})")
        self._emit()

    def fail(self, message: str) -> None:
        """Reset to idle and flag the error (status coloring)."""
        self.percent = 0
        self.label = self.IDLE_LABEL
        self.error = True
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(error=message)
        self._emit()

    def close(self) -> None:
        """Close the progress bar."""
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ExportProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
