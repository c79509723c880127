from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

SUCCESS = "success"
ERROR = "error"
WARNING = "warning"
INFO = "info"


class Notifier(Protocol):
    def notify(self, kind: str, message: str) -> None: ...


class ConsoleNotifier:
    def notify(self, kind: str, message: str) -> None:
        print(f"[{kind}] {message}")


@dataclass
class RecordingNotifier:
    """Keeps notifications in memory for embedding UIs that render them later."""

    messages: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, kind: str, message: str) -> None:
        self.messages.append((kind, message))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.messages]

    def clear(self) -> None:
        self.messages.clear()
