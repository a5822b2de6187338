from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence

from .models import DEFAULT_TIMEOUT, OpenPort, ProbeResult, ScanConfig, ScanReport
from .output import make_sink
from .probe import probe
from .targets import InvalidTarget, Target, parse_target
from .workqueue import WorkQueue

log = logging.getLogger(__name__)

ProbeFn = Callable[[Target, int, float], Awaitable[ProbeResult]]


async def drain_queue(
    target: Target,
    queue: WorkQueue,
    sink,
    report: ScanReport,
    timeout_s: float = DEFAULT_TIMEOUT,
    probe_fn: ProbeFn = probe,
) -> None:
    """
    One worker: claim a port, probe it, repeat until the queue is empty.
    A failing probe is logged and the worker moves on to the next port.
    """
    while True:
        port = queue.claim()
        if port is None:
            return

        report.probes += 1
        try:
            result = await probe_fn(target, port, timeout_s)
        except Exception:
            report.worker_errors += 1
            log.exception("Error scanning %s port %d", target, port)
            continue

        if result is ProbeResult.OPEN:
            hit = OpenPort(target=str(target), port=port)
            report.open_ports.append(hit)
            try:
                sink.emit(hit)
            except Exception:
                report.worker_errors += 1
                log.exception("Error reporting %s", hit.line)


async def _drain_line(
    line: str,
    queue: WorkQueue,
    sink,
    report: ScanReport,
    timeout_s: float,
    probe_fn: ProbeFn,
) -> None:
    # Every worker parses the line on its own, so a bad line is reported once
    # per worker and its ports are left unprobed.
    try:
        target = parse_target(line)
    except InvalidTarget as e:
        report.worker_errors += 1
        log.error("%s", e)
        return
    await drain_queue(target, queue, sink, report, timeout_s, probe_fn)


def _check_threads(threads: int) -> None:
    if threads < 1:
        raise ValueError("threads must be >= 1")


def _start(report: ScanReport, threads: int) -> None:
    report.started_at = time.perf_counter()
    log.info("-" * 50)
    log.info("Threads: %d", threads)
    log.info("Time Started: %s", datetime.now().isoformat(timespec="seconds"))


async def scan_target(
    target: Target,
    ports: Sequence[int],
    threads: int,
    sink,
    timeout_s: float = DEFAULT_TIMEOUT,
    probe_fn: ProbeFn = probe,
) -> ScanReport:
    """
    Single-target mode: `threads` workers drain one shared queue holding
    every port.
    """
    _check_threads(threads)
    report = ScanReport()
    log.info("Scanning Target: %s", target)
    _start(report, threads)

    queue = WorkQueue(ports)
    workers = [
        asyncio.create_task(drain_queue(target, queue, sink, report, timeout_s, probe_fn))
        for _ in range(threads)
    ]
    await asyncio.gather(*workers)

    report.finished_at = time.perf_counter()
    return report


async def scan_targets(
    lines: Iterable[str],
    ports: Sequence[int],
    threads: int,
    sink,
    timeout_s: float = DEFAULT_TIMEOUT,
    probe_fn: ProbeFn = probe,
) -> ScanReport:
    """
    Multi-target mode: each line gets its own copy of the ports in a fresh
    queue and its own `threads` workers. All targets are scanned at once and
    this returns only after every worker of every target has finished.
    """
    _check_threads(threads)
    report = ScanReport()
    lines = list(lines)
    log.info("Scanning Targets: %d from list", len(lines))
    _start(report, threads)

    workers: List[asyncio.Task] = []
    for line in lines:
        queue = WorkQueue(ports)
        for _ in range(threads):
            workers.append(
                asyncio.create_task(_drain_line(line, queue, sink, report, timeout_s, probe_fn))
            )
    await asyncio.gather(*workers)

    report.finished_at = time.perf_counter()
    return report


def run_scan(
    config: ScanConfig,
    target: Optional[Target] = None,
    target_lines: Optional[Iterable[str]] = None,
    sink=None,
    probe_fn: ProbeFn = probe,
) -> ScanReport:
    """
    Blocking entry point. Scans `target_lines` when given, otherwise `target`.
    A sink built here from `config.output` is closed when the scan ends.
    """
    if target_lines is None and target is None:
        raise ValueError("Either target or target_lines is required")

    owned = sink is None
    if owned:
        sink = make_sink(config.output)

    if target_lines is not None:
        coro = scan_targets(target_lines, config.ports, config.threads, sink, config.timeout, probe_fn)
    else:
        coro = scan_target(target, config.ports, config.threads, sink, config.timeout, probe_fn)

    try:
        return asyncio.run(coro)
    finally:
        if owned:
            sink.close()
