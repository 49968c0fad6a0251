"""VM status records of a deployment.

The director reports VM state through a task: `GET
/deployments/<name>/vms?format=full` redirects to a task whose result
stream holds one JSON object per VM. This module defines the wire format
of those objects (`VMStatusResponse` and friends, field names equal to the
JSON keys), the flat domain record `VMStatus`, and `fetch_vms_status`
which ties the task poller, the stream splitter and the aggregator
together.

Numeric vitals arrive as strings and may be `null` or missing. They are
converted to numbers in `to_model()`; `null`/missing becomes `0.0` (or `0`
for kilobyte counters). A string that is not a number is an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from boshops.core.results import decode_result_batch
from boshops.core.stream import split_records
from boshops.core.tasks import TaskAdapter, TaskRequest, poll_task


def _obj(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TypeError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def _list(payload: Mapping[str, Any], key: str) -> tuple[Any, ...]:
    value = payload.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return tuple(value)


def _to_float(value: Any) -> float:
    """Convert a wire number (string, number or null) to float; null -> 0.0."""
    if value is None or value == "":
        return 0.0
    return float(value)


def _to_int(value: Any) -> int:
    """Convert a wire counter to int; null -> 0, "12.0" -> 12."""
    if value is None or value == "":
        return 0
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return int(float(value))
    return int(value)


@dataclass(frozen=True)
class CPUResponse:
    user: str | None = None
    sys: str | None = None
    wait: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> CPUResponse:
        return cls(
            user=payload.get("user"), sys=payload.get("sys"), wait=payload.get("wait")
        )


@dataclass(frozen=True)
class UsageResponse:
    """Memory or swap usage."""

    percent: str | None = None
    kb: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> UsageResponse:
        return cls(percent=payload.get("percent"), kb=payload.get("kb"))


@dataclass(frozen=True)
class DiskUsageResponse:
    percent: str | None = None

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> DiskUsageResponse:
        return cls(percent=payload.get("percent"))


@dataclass(frozen=True)
class DiskResponse:
    system: DiskUsageResponse = DiskUsageResponse()
    persistent: DiskUsageResponse = DiskUsageResponse()

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> DiskResponse:
        return cls(
            system=DiskUsageResponse.from_json(_obj(payload, "system")),
            persistent=DiskUsageResponse.from_json(_obj(payload, "persistent")),
        )


@dataclass(frozen=True)
class VitalsResponse:
    """Point-in-time resource usage of a VM, as sent by the director."""

    load: tuple[str | None, ...] = ()
    cpu: CPUResponse = CPUResponse()
    mem: UsageResponse = UsageResponse()
    swap: UsageResponse = UsageResponse()
    disk: DiskResponse = DiskResponse()

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> VitalsResponse:
        return cls(
            load=_list(payload, "load"),
            cpu=CPUResponse.from_json(_obj(payload, "cpu")),
            mem=UsageResponse.from_json(_obj(payload, "mem")),
            swap=UsageResponse.from_json(_obj(payload, "swap")),
            disk=DiskResponse.from_json(_obj(payload, "disk")),
        )


@dataclass(frozen=True)
class VMStatus:
    """
    Status and vitals of one VM in a deployment.

    Attributes:
        job_name: Instance group (job) running on the VM.
        index: Instance index within the job.
        job_state: Agent-reported job state (e.g. "running").
        vm_cid: Cloud identifier of the VM.
        agent_id: BOSH agent identifier.
        resource_pool: Resource pool the VM belongs to.
        ips: IP addresses, in director order.
        dns: DNS records, in director order (empty when absent).
        resurrection_paused: Whether the resurrector ignores this VM.
        load_1m / load_5m / load_15m: Load averages.
        cpu_user / cpu_sys / cpu_wait: CPU usage percentages.
        memory_percent / memory_kb: Memory usage.
        swap_percent / swap_kb: Swap usage.
        disk_system_percent / disk_persistent_percent: Disk usage percentages.
    """

    job_name: str
    index: int
    job_state: str
    vm_cid: str
    agent_id: str
    resource_pool: str
    ips: tuple[str, ...] = ()
    dns: tuple[str, ...] = ()
    resurrection_paused: bool = False
    load_1m: float = 0.0
    load_5m: float = 0.0
    load_15m: float = 0.0
    cpu_user: float = 0.0
    cpu_sys: float = 0.0
    cpu_wait: float = 0.0
    memory_percent: float = 0.0
    memory_kb: int = 0
    swap_percent: float = 0.0
    swap_kb: int = 0
    disk_system_percent: float = 0.0
    disk_persistent_percent: float = 0.0


@dataclass(frozen=True)
class VMStatusResponse:
    """Wire format of one line of the `vms?format=full` task result."""

    job_name: str | None = None
    index: int | None = None
    job_state: str | None = None
    vm_cid: str | None = None
    agent_id: str | None = None
    resource_pool: str | None = None
    ips: tuple[str, ...] = ()
    dns: tuple[str, ...] = ()
    vitals: VitalsResponse = VitalsResponse()
    resurrection_paused: bool = False

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> VMStatusResponse:
        return cls(
            job_name=payload.get("job_name"),
            index=payload.get("index"),
            job_state=payload.get("job_state"),
            vm_cid=payload.get("vm_cid"),
            agent_id=payload.get("agent_id"),
            resource_pool=payload.get("resource_pool"),
            ips=_list(payload, "ips"),
            dns=_list(payload, "dns"),
            vitals=VitalsResponse.from_json(_obj(payload, "vitals")),
            resurrection_paused=bool(payload.get("resurrection_paused", False)),
        )

    def to_model(self) -> VMStatus:
        vitals = self.vitals
        load = [_to_float(v) for v in vitals.load[:3]]
        load += [0.0] * (3 - len(load))
        return VMStatus(
            job_name=self.job_name or "",
            index=_to_int(self.index),
            job_state=self.job_state or "",
            vm_cid=self.vm_cid or "",
            agent_id=self.agent_id or "",
            resource_pool=self.resource_pool or "",
            ips=tuple(str(ip) for ip in self.ips),
            dns=tuple(str(name) for name in self.dns),
            resurrection_paused=self.resurrection_paused,
            load_1m=load[0],
            load_5m=load[1],
            load_15m=load[2],
            cpu_user=_to_float(vitals.cpu.user),
            cpu_sys=_to_float(vitals.cpu.sys),
            cpu_wait=_to_float(vitals.cpu.wait),
            memory_percent=_to_float(vitals.mem.percent),
            memory_kb=_to_int(vitals.mem.kb),
            swap_percent=_to_float(vitals.swap.percent),
            swap_kb=_to_int(vitals.swap.kb),
            disk_system_percent=_to_float(vitals.disk.system.percent),
            disk_persistent_percent=_to_float(vitals.disk.persistent.percent),
        )


def vms_request(deployment: str) -> TaskRequest:
    """Return the request that starts a full VM status task."""
    if not deployment:
        raise ValueError("deployment name is required")
    return TaskRequest(
        method="GET",
        path=f"/deployments/{deployment}/vms",
        params={"format": "full"},
    )


def fetch_vms_status(
    adapter: TaskAdapter,
    deployment: str,
    *,
    skip_invalid: bool = False,
    **poll_options: Any,
) -> list[VMStatus]:
    """
    Return the status of every VM in a deployment, in director order.

    Args:
        adapter: Director adapter.
        deployment: Deployment name.
        skip_invalid: Skip undecodable result lines instead of failing.
        **poll_options: Passed to `poll_task` (poll_interval, timeout,
            cancel, on_state).
    """
    result = poll_task(adapter, vms_request(deployment), **poll_options)
    return decode_result_batch(
        split_records(result.output), VMStatusResponse, skip_invalid=skip_invalid
    )
