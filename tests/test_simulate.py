"""Tests for the ping, traceroute and process-table simulators."""

from __future__ import annotations

import random
import threading

import pytest

from cmdsheet.simulate import PingSimulator, ProcessTable, Ticker, TracerouteSimulator
from cmdsheet.simulate.processes import PROCESS_STATUSES, filter_and_sort


# ---------------------------------------------------------------------------
# Ticker
# ---------------------------------------------------------------------------


class TestTicker:
    def test_max_ticks(self) -> None:
        seen: list[int] = []
        ticker = Ticker(0, seen.append, max_ticks=3).start()
        ticker.join(5)
        assert seen == [1, 2, 3]
        assert ticker.running is False

    def test_callback_false_stops(self) -> None:
        ticker = Ticker(0, lambda tick: tick < 2).start()
        ticker.join(5)
        assert ticker.ticks == 2

    def test_cancel_stops_callbacks(self) -> None:
        seen: list[int] = []
        ticker = Ticker(0.01, seen.append).start()
        ticker.cancel()
        count = len(seen)
        threading.Event().wait(0.05)
        assert len(seen) == count
        assert ticker.running is False

    def test_cancel_from_callback(self) -> None:
        holder: dict[str, Ticker] = {}

        def _tick(tick: int) -> None:
            holder["ticker"].cancel()

        holder["ticker"] = Ticker(0, _tick)
        holder["ticker"].start().join(5)
        assert holder["ticker"].ticks == 1

    def test_start_twice(self) -> None:
        ticker = Ticker(0, lambda tick: False).start()
        with pytest.raises(RuntimeError):
            ticker.start()
        ticker.cancel()


# ---------------------------------------------------------------------------
# Ping / traceroute
# ---------------------------------------------------------------------------


class TestPingSimulator:
    def test_probe_bounds(self) -> None:
        simulator = PingSimulator(rng=random.Random(1))
        for _ in range(50):
            result = simulator.probe()
            if result.status == "success":
                assert 10 <= result.time_ms <= 110
            else:
                assert result.time_ms == 0.0
            assert result.ttl == 64
        assert [r.seq for r in simulator.results] == list(range(1, 51))

    def test_seeded_runs_repeat(self) -> None:
        first = PingSimulator(rng=random.Random(7))
        second = PingSimulator(rng=random.Random(7))
        assert [first.probe() for _ in range(4)] == [second.probe() for _ in range(4)]

    def test_stats(self) -> None:
        simulator = PingSimulator(rng=random.Random(3))
        for _ in range(20):
            simulator.probe()
        stats = simulator.stats()
        assert stats.sent == 20
        assert stats.received + stats.lost == 20
        assert stats.loss_percent == pytest.approx(stats.lost / 20 * 100)
        if stats.received:
            assert stats.min_ms <= stats.avg_ms <= stats.max_ms

    def test_stats_empty(self) -> None:
        stats = PingSimulator().stats()
        assert stats.sent == 0
        assert stats.loss_percent == 0.0

    def test_start_stops_after_count(self) -> None:
        simulator = PingSimulator(count=3, interval_ms=0, rng=random.Random(0))
        seen = []
        simulator.start(seen.append).join(5)
        assert len(seen) == 3
        assert simulator.results == seen


class TestTracerouteSimulator:
    def test_hop_count_bounds(self) -> None:
        for seed in range(20):
            simulator = TracerouteSimulator(rng=random.Random(seed))
            assert 8 <= simulator.total_hops <= 17

    def test_max_hops_caps_route(self) -> None:
        assert TracerouteSimulator(max_hops=3, rng=random.Random(0)).total_hops == 3

    def test_run_produces_every_hop(self) -> None:
        simulator = TracerouteSimulator(rng=random.Random(5))
        hops = simulator.run()
        assert [h.hop for h in hops] == list(range(1, simulator.total_hops + 1))
        assert simulator.hop() is None
        for hop in hops:
            if hop.status == "timeout":
                assert hop.hostname == "*"
                assert hop.times_ms == (0.0, 0.0, 0.0)
            else:
                assert hop.hostname == f"router-{hop.hop}.isp.net"
                assert all(10 <= t <= 60 for t in hop.times_ms)
            assert all(0 <= int(part) < 255 for part in hop.ip.split("."))

    def test_start_streams_route(self) -> None:
        simulator = TracerouteSimulator(interval_ms=0, rng=random.Random(2))
        seen = []
        simulator.start(seen.append).join(5)
        assert len(seen) == simulator.total_hops


# ---------------------------------------------------------------------------
# Process table
# ---------------------------------------------------------------------------


class TestProcessTable:
    def test_generates_twenty_five(self) -> None:
        table = ProcessTable(rng=random.Random(0))
        processes = table.processes
        assert len(processes) == 25
        assert [p.pid for p in processes] == list(range(1000, 1025))
        assert all(0 <= p.cpu <= 100 and 0 <= p.memory <= 100 for p in processes)

    def test_fluctuate_never_negative(self) -> None:
        table = ProcessTable(rng=random.Random(1))
        for _ in range(50):
            table.fluctuate()
        assert all(p.cpu >= 0 and p.memory >= 0 for p in table.processes)

    def test_kill_pause_resume(self) -> None:
        table = ProcessTable(rng=random.Random(2))
        assert table.pause(1003) is True
        assert next(p for p in table.processes if p.pid == 1003).status == "stopped"
        assert table.resume(1003) is True
        assert next(p for p in table.processes if p.pid == 1003).status == "running"
        assert table.kill(1003) is True
        assert table.kill(1003) is False
        assert len(table.processes) == 24
        assert table.pause(1) is False

    def test_view_sorts_and_filters(self) -> None:
        table = ProcessTable(rng=random.Random(3))
        by_memory = table.view(sort_by="memory", descending=False)
        assert [p.memory for p in by_memory] == sorted(p.memory for p in by_memory)

        for status in PROCESS_STATUSES:
            assert all(p.status == status for p in table.view(status=status))

    def test_search_matches_pid(self) -> None:
        table = ProcessTable(rng=random.Random(4))
        assert [p.pid for p in table.view(search="1017")] == [1017]

    def test_unknown_sort_key_uses_cpu(self) -> None:
        processes = ProcessTable(rng=random.Random(5)).processes
        ordered = filter_and_sort(processes, sort_by="colour")
        assert [p.cpu for p in ordered] == sorted((p.cpu for p in processes), reverse=True)

    def test_averages(self) -> None:
        table = ProcessTable(rng=random.Random(6))
        cpu, memory = table.averages()
        assert cpu == pytest.approx(sum(p.cpu for p in table.processes) / 25)
        for process in table.processes:
            table.kill(process.pid)
        assert table.averages() == (0.0, 0.0)

    def test_auto_refresh(self) -> None:
        table = ProcessTable(rng=random.Random(7))
        refreshed = threading.Event()
        table.start_auto_refresh(0, lambda _: refreshed.set())
        try:
            assert refreshed.wait(5)
        finally:
            table.close()
