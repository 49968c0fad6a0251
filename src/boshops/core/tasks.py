"""Director task models and the task polling protocol.

Some director endpoints do not answer directly. They redirect to a task
resource (`/tasks/<id>`) that the client polls until the task reaches a
terminal state, after which the result is read from
`/tasks/<id>/output?type=result`.

The polling loop is synchronous and owns all of its state; the only
suspension point is the wait between two non-terminal snapshots, which a
caller can interrupt with a cancellation event or an overall timeout.
"""

from __future__ import annotations

import json
import logging
import re
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Protocol

import httpx

from boshops.core.errors import (
    ApiResponse,
    PollInterrupted,
    ProtocolError,
    TaskFailed,
)

logger = logging.getLogger(__name__)

_TASK_PATH_RE = re.compile(r"^/tasks/(\d+)/?$")


class TaskState(str, Enum):
    """
    Enumeration of director task states.

    Values:
        QUEUED: The task is waiting for a worker.
        PROCESSING: The task is running.
        DONE: The task finished successfully.
        ERROR: The task finished with an error.
        CANCELLED: The task was cancelled.
        TIMEOUT: The director gave up on the task.
        UNKNOWN: The director reported a state this client does not know.
    """

    QUEUED = "queued"
    PROCESSING = "processing"
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> TaskState:
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


NON_TERMINAL_STATES = frozenset({TaskState.QUEUED, TaskState.PROCESSING})


@dataclass(frozen=True)
class Task:
    """
    One snapshot of a director task.

    Attributes:
        id: Task identifier.
        state: Raw state string as reported by the director.
        description: Free-text description (e.g. "retrieve vm-stats").
        timestamp: Creation time as a unix timestamp.
        result: Short result summary, only set once the task is terminal.
        user: User that owns the task.
    """

    id: int
    state: str
    description: str = ""
    timestamp: int = 0
    result: str | None = None
    user: str = ""

    @property
    def status(self) -> TaskState:
        return TaskState.parse(self.state)

    @property
    def is_terminal(self) -> bool:
        return self.status not in NON_TERMINAL_STATES

    @classmethod
    def from_json(cls, payload: Any) -> Task:
        """Build a Task from the `/tasks/<id>` JSON body."""
        if not isinstance(payload, Mapping):
            raise ValueError("task body is not a JSON object")
        try:
            task_id = int(payload["id"])
            state = str(payload["state"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"task body lacks a valid id/state: {exc}") from exc
        return cls(
            id=task_id,
            state=state,
            description=str(payload.get("description") or ""),
            timestamp=int(payload.get("timestamp") or 0),
            result=payload.get("result"),
            user=str(payload.get("user") or ""),
        )


@dataclass(frozen=True)
class TaskRequest:
    """
    Describes the request that makes the director start a task.

    Attributes:
        method: HTTP verb.
        path: Director path, e.g. `/deployments/cf/vms`.
        params: Optional query parameters.
        body: Optional JSON body.
    """

    method: str
    path: str
    params: Mapping[str, str] = field(default_factory=dict)
    body: Any = None


@dataclass(frozen=True)
class TaskResult:
    """Final task snapshot plus the raw result stream."""

    task: Task
    output: bytes
    response: ApiResponse


class TaskAdapter(Protocol):
    """Interface of the transport primitive used by the poller."""

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        phase: str = "request",
    ) -> ApiResponse:
        """Send one HTTP request and return the raw response."""
        ...


class Waiter(Protocol):
    """Anything with `threading.Event.wait` semantics."""

    def wait(self, timeout: float | None = None) -> bool:
        """Block up to `timeout` seconds; return True when interrupted."""
        ...


def task_id_from_location(location: str | None) -> int:
    """
    Extract the task id from a redirect `Location` header.

    Only the path is inspected. Task requests always go to the configured
    director, whatever host the header names.

    Raises:
        ProtocolError: If the header is missing or does not name a task.
    """
    if not location:
        raise ProtocolError("redirect to task has no Location header", phase="trigger")
    try:
        path = httpx.URL(location).path
    except httpx.InvalidURL as exc:
        raise ProtocolError(
            f"malformed task redirect '{location}'", phase="trigger"
        ) from exc
    match = _TASK_PATH_RE.match(path)
    if not match:
        raise ProtocolError(
            f"redirect '{location}' does not point at a task", phase="trigger"
        )
    return int(match.group(1))


def _read_task(
    adapter: TaskAdapter, task_id: int, *, phase: str
) -> tuple[Task, ApiResponse]:
    resp = adapter.request("GET", f"/tasks/{task_id}", phase=phase)
    if not resp.is_success:
        raise ProtocolError(
            f"{phase}: GET /tasks/{task_id} returned status {resp.status_code}",
            response=resp,
            phase=phase,
        )
    try:
        return Task.from_json(json.loads(resp.body)), resp
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as exc:
        raise ProtocolError(
            f"{phase}: malformed task {task_id}: {exc}", response=resp, phase=phase
        ) from exc


def fetch_task(adapter: TaskAdapter, task_id: int, *, phase: str = "poll") -> Task:
    """GET `/tasks/<id>` and decode it."""
    task, _ = _read_task(adapter, task_id, phase=phase)
    return task


def fetch_task_output(adapter: TaskAdapter, task_id: int) -> ApiResponse:
    """GET the result stream of a finished task."""
    resp = adapter.request(
        "GET", f"/tasks/{task_id}/output", params={"type": "result"}, phase="output"
    )
    if not resp.is_success:
        raise ProtocolError(
            f"output: GET /tasks/{task_id}/output returned status {resp.status_code}",
            response=resp,
            phase="output",
        )
    return resp


def poll_task(
    adapter: TaskAdapter,
    request: TaskRequest,
    *,
    poll_interval: float = 1.0,
    timeout: float | None = None,
    cancel: Waiter | None = None,
    on_state: Callable[[Task], None] | None = None,
) -> TaskResult:
    """
    Trigger a task, poll it to completion and fetch its result stream.

    Args:
        adapter: Transport used for every request.
        request: The request that makes the director start the task.
        poll_interval: Seconds to wait between two non-terminal snapshots.
        timeout: Overall polling deadline in seconds, or None for no deadline.
        cancel: Event that interrupts the wait when set.
        on_state: Called with every observed task snapshot.

    Returns:
        A TaskResult holding the final task and the raw output body.

    Raises:
        TransportError: A request failed at the network level.
        ProtocolError: The director did not follow the task protocol.
        TaskFailed: The task ended in a state other than `done`.
        PollInterrupted: The cancel event was set or the deadline passed.
    """
    if poll_interval <= 0:
        raise ValueError("poll_interval must be > 0")

    waiter = cancel if cancel is not None else threading.Event()
    deadline = time.monotonic() + timeout if timeout is not None else None

    trigger = adapter.request(
        request.method,
        request.path,
        params=request.params,
        body=request.body,
        phase="trigger",
    )
    if not trigger.is_redirect:
        raise ProtocolError(
            f"expected redirect to task, got status {trigger.status_code}",
            response=trigger,
            phase="trigger",
        )
    try:
        task_id = task_id_from_location(trigger.header("Location"))
    except ProtocolError as exc:
        exc.response = trigger
        raise

    while True:
        task, snapshot = _read_task(adapter, task_id, phase="poll")
        logger.debug("task %s is %s", task.id, task.state)
        if on_state is not None:
            on_state(task)

        if task.status == TaskState.DONE:
            break
        if task.is_terminal:
            raise TaskFailed(task, response=snapshot)

        delay = poll_interval
        if deadline is not None:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise PollInterrupted("timeout", task=task)
            delay = min(delay, remaining)
        if waiter.wait(delay):
            raise PollInterrupted("cancelled", task=task)

    output = fetch_task_output(adapter, task_id)
    return TaskResult(task=task, output=output.body, response=output)


def get_task(adapter: TaskAdapter, task_id: int) -> Task:
    """Return the current snapshot of a task."""
    return fetch_task(adapter, task_id, phase="request")
