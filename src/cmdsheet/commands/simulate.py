"""Simulate commands -- fabricated ping, traceroute and process-table output.

Provides the ``cmdsheet simulate`` sub-command group. Nothing here runs the
real tools; output is drawn from the simulators in :mod:`cmdsheet.simulate`
so that a command line can be previewed alongside what it would print.
Pass ``--seed`` for repeatable output and ``--interval 0`` to skip the
pacing.
"""

from __future__ import annotations

import random
from typing import Optional

import typer

from cmdsheet.commands._common import exit_on_error
from cmdsheet.output import OutputFormat, format_response, get_output, info, print_data, print_table


simulate_app = typer.Typer(no_args_is_help=True)


def _settings():  # noqa: ANN202
    from cmdsheet.config import resolve_config

    with exit_on_error():
        return resolve_config().simulation


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)


@simulate_app.command("ping")
def simulate_ping(
    target: str = typer.Argument("google.com", help="Host name to pretend to ping."),
    count: int = typer.Option(4, "--count", "-c", min=1, help="Number of echo requests."),
    interval: Optional[int] = typer.Option(
        None, "--interval", "-i", min=0, help="Milliseconds between requests."
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for repeatable output."),
) -> None:
    """Print fabricated ping replies followed by the summary.

    Example::

        cmdsheet simulate ping example.org -c 3
        cmdsheet simulate ping --interval 0 --seed 7 --json
    """
    from cmdsheet.simulate import PingSimulator

    interval_ms = interval if interval is not None else _settings().ping_interval_ms
    simulator = PingSimulator(target, count=count, interval_ms=interval_ms, rng=_rng(seed))
    streaming = get_output().format != OutputFormat.JSON

    def _on_result(result) -> None:  # noqa: ANN001
        if not streaming:
            return
        if result.status == "success":
            print_data(
                f"64 bytes from {target}: icmp_seq={result.seq} "
                f"ttl={result.ttl} time={result.time_ms:.1f} ms"
            )
        else:
            print_data(f"Request timeout for icmp_seq {result.seq}")

    if streaming:
        info(f"PING {target}: 56 data bytes")
    ticker = simulator.start(_on_result)
    try:
        ticker.join()
    finally:
        simulator.stop()

    stats = simulator.stats()
    if not streaming:
        format_response({
            "target": target,
            "results": [r.model_dump() for r in simulator.results],
            "stats": stats.model_dump(),
        })
        return
    print_data(f"--- {target} ping statistics ---")
    print_data(
        f"{stats.sent} packets transmitted, {stats.received} packets received, "
        f"{stats.loss_percent:.1f}% packet loss"
    )
    print_data(
        f"round-trip min/avg/max = {stats.min_ms:.1f}/{stats.avg_ms:.1f}/{stats.max_ms:.1f} ms"
    )


@simulate_app.command("traceroute")
def simulate_traceroute(
    target: str = typer.Argument("google.com", help="Host name to pretend to trace."),
    max_hops: int = typer.Option(30, "--max-hops", "-m", min=1, help="Upper bound on hops."),
    interval: Optional[int] = typer.Option(
        None, "--interval", "-i", min=0, help="Milliseconds between hops."
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for repeatable output."),
) -> None:
    """Print a fabricated route to *target*, one hop at a time.

    Example::

        cmdsheet simulate traceroute example.org --max-hops 10
    """
    from cmdsheet.simulate import TracerouteSimulator

    interval_ms = interval if interval is not None else _settings().traceroute_interval_ms
    simulator = TracerouteSimulator(target, max_hops=max_hops, interval_ms=interval_ms, rng=_rng(seed))
    streaming = get_output().format != OutputFormat.JSON

    def _on_hop(hop) -> None:  # noqa: ANN001
        if not streaming:
            return
        if hop.status == "timeout":
            print_data(f"{hop.hop:>2}  * * *")
        else:
            times = "  ".join(f"{t:.3f} ms" for t in hop.times_ms)
            print_data(f"{hop.hop:>2}  {hop.hostname} ({hop.ip})  {times}")

    if streaming:
        info(f"traceroute to {target}, {max_hops} hops max, 60 byte packets")
    ticker = simulator.start(_on_hop)
    try:
        ticker.join()
    finally:
        simulator.stop()

    if not streaming:
        format_response({"target": target, "hops": [h.model_dump() for h in simulator.hops]})


@simulate_app.command("ps")
def simulate_ps(
    sort: str = typer.Option("cpu", "--sort", help="Sort key: cpu, memory, pid or name."),
    status: str = typer.Option(
        "all", "--status", help="Only show running, sleeping, stopped or zombie processes."
    ),
    search: str = typer.Option("", "--search", help="Match name, user or PID."),
    descending: bool = typer.Option(True, "--desc/--asc", help="Sort direction."),
    refreshes: int = typer.Option(
        0, "--refreshes", min=0, help="Let the figures drift this many times before printing."
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for repeatable output."),
) -> None:
    """Print a fabricated process table.

    Example::

        cmdsheet simulate ps --sort memory --status running
        cmdsheet simulate ps --search nginx --asc --plain
    """
    from cmdsheet.simulate import ProcessTable
    from cmdsheet.simulate.processes import PROCESS_STATUSES, SORT_KEYS

    if sort not in SORT_KEYS:
        raise typer.BadParameter(f"expected one of {', '.join(SORT_KEYS)}", param_hint="--sort")
    if status != "all" and status not in PROCESS_STATUSES:
        raise typer.BadParameter(
            f"expected all or one of {', '.join(PROCESS_STATUSES)}", param_hint="--status"
        )

    table = ProcessTable(rng=_rng(seed))
    for _ in range(refreshes):
        table.fluctuate()

    processes = table.view(search=search, status=status, sort_by=sort, descending=descending)
    rows = [
        [
            str(p.pid),
            p.name,
            p.user,
            f"{p.cpu:.1f}",
            f"{p.memory:.1f}",
            p.status,
            p.start_time.strftime("%H:%M:%S"),
            p.command,
        ]
        for p in processes
    ]
    print_table(
        ["pid", "name", "user", "cpu", "memory", "status", "started", "command"],
        rows,
        title="Processes",
    )
    cpu, memory = table.averages()
    info(f"{len(processes)} of {len(table.processes)} processes, avg cpu {cpu:.1f}%, avg memory {memory:.1f}%")
