"""Error types raised by the director client.

Every error carries the `ApiResponse` that triggered it (when there was one)
and the phase of the task protocol it happened in, so callers can print the
raw HTTP status and body for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from boshops.core.tasks import Task


@dataclass(frozen=True)
class ApiResponse:
    """Raw HTTP response as seen by the transport primitive."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return self.status_code in {301, 302, 303, 307, 308}

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class DirectorError(RuntimeError):
    """Base class for all director client failures."""

    def __init__(
        self,
        message: str,
        *,
        response: ApiResponse | None = None,
        phase: str | None = None,
    ):
        super().__init__(message)
        self.response = response
        self.phase = phase


class TransportError(DirectorError):
    """Raised when the request never produced an HTTP response."""


class ProtocolError(DirectorError):
    """Raised when the director answers in a way the client cannot follow."""


class TaskFailed(DirectorError):
    """Raised when a task reaches a terminal state other than `done`."""

    def __init__(self, task: Task, *, response: ApiResponse | None = None):
        super().__init__(
            f"task {task.id} ({task.description}) ended in state '{task.state}'",
            response=response,
            phase="poll",
        )
        self.task = task


class DecodeError(DirectorError):
    """Raised when one line of a result stream cannot be decoded."""

    def __init__(self, message: str, *, index: int):
        super().__init__(f"line {index}: {message}", phase="decode")
        self.index = index


class PollInterrupted(DirectorError):
    """Raised when polling stops before the task reached a terminal state."""

    def __init__(self, reason: str, *, task: Task | None = None):
        label = f"task {task.id}" if task is not None else "task"
        super().__init__(f"polling {label} stopped: {reason}", phase="poll")
        self.reason = reason
        self.task = task
