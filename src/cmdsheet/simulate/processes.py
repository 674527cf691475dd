"""A fabricated process table that drifts over time.

:class:`ProcessTable` holds 25 mock processes with random CPU and memory
figures. :meth:`ProcessTable.fluctuate` nudges every figure a little, the
way a live ``top`` view would change between refreshes, and
:meth:`ProcessTable.start_auto_refresh` does so on a timer. Kill, pause and
resume only edit the in-memory list.
"""

from __future__ import annotations

import random
import threading
from datetime import datetime, timedelta
from typing import Callable, Literal, Optional

from pydantic import BaseModel

from cmdsheet.simulate.ticker import Ticker

PROCESS_NAMES = (
    "nginx", "apache2", "mysql", "postgres", "redis-server", "docker",
    "node", "python", "java", "chrome", "firefox", "systemd",
    "sshd", "cron", "bash", "vim", "code", "slack",
)
PROCESS_USERS = ("root", "www-data", "mysql", "postgres", "user", "admin")
PROCESS_STATUSES = ("running", "sleeping", "stopped", "zombie")
SORT_KEYS = ("cpu", "memory", "pid", "name")

ProcessStatus = Literal["running", "sleeping", "stopped", "zombie"]


class MockProcess(BaseModel):
    pid: int
    name: str
    user: str
    cpu: float
    memory: float
    status: ProcessStatus
    start_time: datetime
    command: str


def generate_processes(
    rng: random.Random,
    size: int = 25,
    now: Optional[datetime] = None,
) -> list[MockProcess]:
    """Return *size* random processes with PIDs counting up from 1000."""
    now = now or datetime.now()
    return [
        MockProcess(
            pid=1000 + i,
            name=rng.choice(PROCESS_NAMES),
            user=rng.choice(PROCESS_USERS),
            cpu=rng.random() * 100,
            memory=rng.random() * 100,
            status=rng.choice(PROCESS_STATUSES),
            start_time=now - timedelta(milliseconds=rng.random() * 86_400_000),
            command=f"/usr/bin/{rng.choice(PROCESS_NAMES)} --config=/etc/config",
        )
        for i in range(size)
    ]


def filter_and_sort(
    processes: list[MockProcess],
    search: str = "",
    status: str = "all",
    sort_by: str = "cpu",
    descending: bool = True,
) -> list[MockProcess]:
    """Select and order processes the way the table view does.

    *search* matches a substring of the name or user (case-insensitive)
    or of the PID. *status* ``"all"`` disables the status filter.
    """
    needle = search.lower()
    selected = [
        p for p in processes
        if (not needle or needle in p.name.lower() or needle in str(p.pid) or needle in p.user.lower())
        and (status == "all" or p.status == status)
    ]
    key = sort_by if sort_by in SORT_KEYS else "cpu"
    return sorted(selected, key=lambda p: getattr(p, key), reverse=descending)


class ProcessTable:
    """Mutable mock process list with optional periodic drift.

    Args:
        rng: Random source; seed it for repeatable tables.
        size: Number of processes to generate.
    """

    def __init__(self, rng: Optional[random.Random] = None, size: int = 25) -> None:
        self._rng = rng or random.Random()
        self._size = size
        self._lock = threading.Lock()
        self._processes = generate_processes(self._rng, size)
        self._ticker: Optional[Ticker] = None

    @property
    def processes(self) -> list[MockProcess]:
        with self._lock:
            return list(self._processes)

    def refresh(self) -> None:
        """Replace the table with a freshly generated one."""
        with self._lock:
            self._processes = generate_processes(self._rng, self._size)

    def fluctuate(self) -> None:
        """Move each CPU figure by up to +-10 and each memory figure by up to +-5, floored at 0."""
        with self._lock:
            self._processes = [
                p.model_copy(update={
                    "cpu": max(0.0, p.cpu + (self._rng.random() - 0.5) * 20),
                    "memory": max(0.0, p.memory + (self._rng.random() - 0.5) * 10),
                })
                for p in self._processes
            ]

    def view(self, **criteria) -> list[MockProcess]:
        """Return the current table through :func:`filter_and_sort`."""
        return filter_and_sort(self.processes, **criteria)

    def kill(self, pid: int) -> bool:
        """Drop *pid* from the table. Returns ``False`` if it was not there."""
        with self._lock:
            before = len(self._processes)
            self._processes = [p for p in self._processes if p.pid != pid]
            return len(self._processes) != before

    def pause(self, pid: int) -> bool:
        return self._set_status(pid, "stopped")

    def resume(self, pid: int) -> bool:
        return self._set_status(pid, "running")

    def averages(self) -> tuple[float, float]:
        """Mean CPU and memory across the table (zeros when empty)."""
        processes = self.processes
        if not processes:
            return 0.0, 0.0
        count = len(processes)
        return sum(p.cpu for p in processes) / count, sum(p.memory for p in processes) / count

    def start_auto_refresh(
        self,
        interval: float = 3.0,
        on_refresh: Optional[Callable[["ProcessTable"], None]] = None,
    ) -> Ticker:
        """Call :meth:`fluctuate` every *interval* seconds until stopped."""
        self.stop_auto_refresh()

        def _tick(_: int) -> None:
            self.fluctuate()
            if on_refresh is not None:
                on_refresh(self)

        self._ticker = Ticker(interval, _tick)
        return self._ticker.start()

    def stop_auto_refresh(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def close(self) -> None:
        self.stop_auto_refresh()

    def _set_status(self, pid: int, status: ProcessStatus) -> bool:
        with self._lock:
            for index, process in enumerate(self._processes):
                if process.pid == pid:
                    self._processes[index] = process.model_copy(update={"status": status})
                    return True
        return False
