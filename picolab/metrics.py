"""Host metrics: operating system, processes, memory, CPU and disks."""

from __future__ import annotations

import asyncio
import platform
import socket
import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import psutil

# Shortest interval over which CPU usage deltas are meaningful.
MINIMUM_CPU_UPDATE_INTERVAL = 0.2

UNKNOWN = "Unknown"

_GONE = (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess)


class Kind(str, Enum):
    """The metric groups that can be requested by name."""

    SYSTEM = "system"
    PROCESS = "process"
    MEMORY = "memory"
    CPU = "cpu"
    DISK = "disk"


@dataclass
class Host:
    """A refreshed view of the machine, with CPU usage sampled over an interval."""

    processes: list[psutil.Process] = field(default_factory=list)
    process_cpu: dict[int, float] = field(default_factory=dict)
    cpu_usage: float = 0.0
    core_usage: list[float] = field(default_factory=list)


async def init() -> Host:
    """Refresh everything, wait for a CPU sampling interval and return the host view."""
    processes = list(psutil.process_iter())
    for proc in processes:
        try:
            proc.cpu_percent(None)
        except _GONE:
            pass
    psutil.cpu_percent(None)
    psutil.cpu_percent(None, percpu=True)

    await asyncio.sleep(MINIMUM_CPU_UPDATE_INTERVAL)

    process_cpu: dict[int, float] = {}
    for proc in processes:
        try:
            process_cpu[proc.pid] = float(proc.cpu_percent(None))
        except _GONE:
            pass
    return Host(
        processes=processes,
        process_cpu=process_cpu,
        cpu_usage=float(psutil.cpu_percent(None)),
        core_usage=[float(u) for u in psutil.cpu_percent(None, percpu=True)],
    )


def _os_release() -> dict[str, str]:
    try:
        return platform.freedesktop_os_release()
    except OSError:
        return {}


def _os_name() -> str | None:
    return _os_release().get("NAME") or platform.system() or None


def _os_version() -> str | None:
    system = platform.system()
    if system == "Darwin":
        return platform.mac_ver()[0] or None
    if system == "Windows":
        return platform.version() or None
    return _os_release().get("VERSION_ID") or None


def _host_name() -> str | None:
    try:
        return socket.gethostname() or None
    except OSError:
        return None


@dataclass
class System:
    """Operating system identification and uptime."""

    name: str
    kernel_version: str
    os_version: str
    host_name: str
    uptime: int

    @classmethod
    def generate(cls) -> System:
        return cls(
            name=_os_name() or UNKNOWN,
            kernel_version=platform.release() or UNKNOWN,
            os_version=_os_version() or UNKNOWN,
            host_name=_host_name() or UNKNOWN,
            uptime=max(0, int(time.time() - psutil.boot_time())),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Process:
    """One running process."""

    pid: int
    name: str
    memory: int
    cpu_usage: float
    run_time: int

    @classmethod
    def generate(cls, host: Host) -> list[Process]:
        now = time.time()
        result = []
        for proc in host.processes:
            try:
                with proc.oneshot():
                    name = proc.name()
                    memory = proc.memory_info().rss
                    started = proc.create_time()
            except _GONE:
                continue
            result.append(
                cls(
                    pid=proc.pid,
                    name=name,
                    memory=int(memory),
                    cpu_usage=host.process_cpu.get(proc.pid, 0.0),
                    run_time=max(0, int(now - started)),
                )
            )
        return result

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Memory:
    """Used and total physical memory, in bytes."""

    used: int
    total: int

    @classmethod
    def generate(cls, host: Host) -> Memory:
        vm = psutil.virtual_memory()
        return cls(used=int(vm.total - vm.available), total=int(vm.total))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CoreMetrics:
    """Usage and frequency of one logical CPU."""

    name: str
    brand: str
    usage: float
    frequency: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _cpu_brand() -> str:
    try:
        with open("/proc/cpuinfo", encoding="utf-8", errors="replace") as info:
            for line in info:
                key, sep, value = line.partition(":")
                if sep and key.strip() == "model name":
                    return value.strip()
    except OSError:
        pass
    return platform.processor()


def _core_frequencies(count: int) -> list[int]:
    try:
        per_core = psutil.cpu_freq(percpu=True) or []
    except (OSError, NotImplementedError):
        per_core = []
    if len(per_core) == count:
        return [int(f.current) for f in per_core]
    try:
        overall = psutil.cpu_freq()
    except (OSError, NotImplementedError):
        overall = None
    value = int(overall.current) if overall else 0
    return [value] * count


@dataclass
class Cpu:
    """Global CPU usage and per-core metrics."""

    cpu_usage: float
    cores: list[CoreMetrics]

    @classmethod
    def generate(cls, host: Host) -> Cpu:
        brand = _cpu_brand()
        frequencies = _core_frequencies(len(host.core_usage))
        cores = [
            CoreMetrics(name=f"cpu{index}", brand=brand, usage=usage, frequency=freq)
            for index, (usage, freq) in enumerate(zip(host.core_usage, frequencies))
        ]
        return cls(cpu_usage=host.cpu_usage, cores=cores)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _is_removable(device: str, opts: str) -> bool:
    if "removable" in opts.split(","):
        return True
    entry = Path("/sys/class/block") / Path(device).name
    for candidate in (entry, entry.resolve().parent if entry.exists() else None):
        if candidate is None:
            continue
        try:
            return (candidate / "removable").read_text().strip() == "1"
        except OSError:
            continue
    return False


@dataclass
class Disk:
    """One mounted disk and its space, in bytes."""

    name: str
    available_space: int
    total_space: int
    is_removable: bool

    @classmethod
    def generate(cls, host: Host) -> list[Disk]:
        result = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                continue
            result.append(
                cls(
                    name=part.device,
                    available_space=int(usage.free),
                    total_space=int(usage.total),
                    is_removable=_is_removable(part.device, part.opts),
                )
            )
        return result

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Summary:
    """Every metric group at once."""

    system: System
    process: list[Process]
    memory: Memory
    cpu: Cpu
    disk: list[Disk]

    @classmethod
    def generate(cls, host: Host) -> Summary:
        return cls(
            system=System.generate(),
            process=Process.generate(host),
            memory=Memory.generate(host),
            cpu=Cpu.generate(host),
            disk=Disk.generate(host),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)