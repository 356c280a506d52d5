"""Progress callbacks for UI layers.

Services report progress through these hooks and never print; the CLI
decides how each event looks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


@dataclass
class InstallHooks:
    """Optional callbacks (section headers, success, info, warnings)."""

    step: Callable[[str], None] | None = None
    success: Callable[[str], None] | None = None
    info: Callable[[str], None] | None = None
    warning: Callable[[str], None] | None = None
    step_done: Callable[[], None] | None = None

    def on_step(self, title: str) -> None:
        if self.step:
            self.step(title)

    def on_success(self, message: str) -> None:
        if self.success:
            self.success(message)

    def on_info(self, message: str) -> None:
        if self.info:
            self.info(message)

    def on_warning(self, message: str) -> None:
        if self.warning:
            self.warning(message)

    def on_step_done(self) -> None:
        if self.step_done:
            self.step_done()
