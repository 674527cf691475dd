"""Fabricated ping and traceroute output for demonstration.

Nothing here touches the network. Latencies, losses and hop addresses are
drawn from a :class:`random.Random`, which callers may seed for repeatable
output. Rows can be produced one at a time (:meth:`PingSimulator.probe`,
:meth:`TracerouteSimulator.hop`) or streamed at a fixed cadence through a
:class:`~cmdsheet.simulate.ticker.Ticker` with ``start``/``stop``.
"""

from __future__ import annotations

import random
from typing import Callable, Literal, Optional

from pydantic import BaseModel

from cmdsheet.simulate.ticker import Ticker

PING_TTL = 64
PING_SUCCESS_RATE = 0.9
TRACEROUTE_TIMEOUT_RATE = 0.1


class PingResult(BaseModel):
    seq: int
    time_ms: float
    ttl: int = PING_TTL
    status: Literal["success", "timeout"]


class PingStats(BaseModel):
    """Summary line printed when a ping run ends."""

    sent: int
    received: int
    lost: int
    loss_percent: float
    min_ms: float
    max_ms: float
    avg_ms: float


class TracerouteHop(BaseModel):
    hop: int
    ip: str
    hostname: str
    times_ms: tuple[float, float, float]
    status: Literal["success", "timeout"]


class PingSimulator:
    """Emit up to ``count`` fake echo replies for ``target``.

    Each probe takes 10 to 110 ms and succeeds nine times out of ten.
    """

    def __init__(
        self,
        target: str = "google.com",
        count: int = 4,
        interval_ms: int = 1000,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.target = target
        self.count = count
        self.interval_ms = interval_ms
        self.results: list[PingResult] = []
        self._rng = rng or random.Random()
        self._ticker: Optional[Ticker] = None

    def probe(self) -> PingResult:
        """Fabricate the next reply and append it to :attr:`results`."""
        latency = self._rng.random() * 100 + 10
        success = self._rng.random() < PING_SUCCESS_RATE
        result = PingResult(
            seq=len(self.results) + 1,
            time_ms=latency if success else 0.0,
            status="success" if success else "timeout",
        )
        self.results.append(result)
        return result

    def stats(self) -> PingStats:
        times = [r.time_ms for r in self.results if r.status == "success"]
        sent = len(self.results)
        received = len(times)
        return PingStats(
            sent=sent,
            received=received,
            lost=sent - received,
            loss_percent=(sent - received) / sent * 100 if sent else 0.0,
            min_ms=min(times) if times else 0.0,
            max_ms=max(times) if times else 0.0,
            avg_ms=sum(times) / received if times else 0.0,
        )

    def start(self, on_result: Callable[[PingResult], None]) -> Ticker:
        """Probe every ``interval_ms`` until ``count`` replies or :meth:`stop`."""
        self.results = []

        def _tick(_: int) -> None:
            on_result(self.probe())

        self._ticker = Ticker(self.interval_ms / 1000, _tick, max_ticks=self.count)
        return self._ticker.start()

    def stop(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()


def random_ipv4(rng: random.Random) -> str:
    return ".".join(str(rng.randrange(255)) for _ in range(4))


class TracerouteSimulator:
    """Emit 8 to 17 fake hops (never more than ``max_hops``).

    One hop in ten times out and is shown as ``*`` with zero times.
    """

    def __init__(
        self,
        target: str = "google.com",
        max_hops: int = 30,
        interval_ms: int = 500,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.target = target
        self.max_hops = max_hops
        self.interval_ms = interval_ms
        self.hops: list[TracerouteHop] = []
        self._rng = rng or random.Random()
        self.total_hops = min(self._rng.randrange(10) + 8, max_hops)
        self._ticker: Optional[Ticker] = None

    def hop(self) -> Optional[TracerouteHop]:
        """Fabricate the next hop, or return ``None`` once the route is complete."""
        if len(self.hops) >= self.total_hops:
            return None
        number = len(self.hops) + 1
        timeout = self._rng.random() < TRACEROUTE_TIMEOUT_RATE
        ip = random_ipv4(self._rng)
        if timeout:
            times = (0.0, 0.0, 0.0)
        else:
            times = tuple(self._rng.random() * 50 + 10 for _ in range(3))
        hop = TracerouteHop(
            hop=number,
            ip=ip,
            hostname="*" if timeout else f"router-{number}.isp.net",
            times_ms=times,
            status="timeout" if timeout else "success",
        )
        self.hops.append(hop)
        return hop

    def run(self) -> list[TracerouteHop]:
        """Produce every remaining hop at once."""
        while self.hop() is not None:
            pass
        return list(self.hops)

    def start(self, on_hop: Callable[[TracerouteHop], None]) -> Ticker:
        """Emit one hop every ``interval_ms`` until the route is complete or :meth:`stop`."""

        def _tick(_: int) -> bool:
            hop = self.hop()
            if hop is None:
                return False
            on_hop(hop)
            return len(self.hops) < self.total_hops

        self._ticker = Ticker(self.interval_ms / 1000, _tick)
        return self._ticker.start()

    def stop(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
