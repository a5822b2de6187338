from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from .models import DEFAULT_PORTS, DEFAULT_THREADS, DEFAULT_TIMEOUT, ScanConfig
from .output import log_summary
from .ports import parse_ports
from .scanner import run_scan
from .targets import InvalidTarget, parse_target, read_targets

log = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="portsweep",
        description="Concurrent TCP connect port scanner",
        usage="%(prog)s <ip address> [options]",
    )
    p.add_argument("target", nargs="?", help="IPv4 or IPv6 address to scan")
    p.add_argument("-p", dest="ports", help="Ports: 1,2,3 or 10-30 or all (default: 1-1024)")
    p.add_argument("-t", dest="threads", type=int, default=DEFAULT_THREADS,
                   help=f"Workers per target (default: {DEFAULT_THREADS})")
    p.add_argument("-f", dest="targets_file", help="File containing one IP address per line")
    p.add_argument("-o", dest="output", help="Append open ports to this file instead of stdout")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help=f"Connect timeout seconds (default: {DEFAULT_TIMEOUT})")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def _through_targets_file(argv: List[str]) -> List[str]:
    # The file scan starts as soon as -f and its path are read, so anything
    # after them is ignored.
    for i, arg in enumerate(argv):
        if arg == "-f":
            return argv[:i + 2]
        if arg.startswith("-f") and not arg.startswith("--"):
            return argv[:i + 1]
    return argv


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(_through_targets_file(argv))
    setup_logging(args.verbose)

    if args.threads < 1:
        parser.error("-t must be >= 1")
    if args.timeout <= 0:
        parser.error("--timeout must be > 0")

    ports = tuple(parse_ports(args.ports)) if args.ports is not None else DEFAULT_PORTS
    config = ScanConfig(threads=args.threads, ports=ports, output=args.output, timeout=args.timeout)

    if args.targets_file:
        try:
            lines = read_targets(args.targets_file)
        except OSError as e:
            log.error("Error opening file: %s (%s)", args.targets_file, e)
            return 1
        report = run_scan(config, target_lines=lines)
    else:
        if args.target is None:
            parser.error("a target address or -f <file> is required")
        try:
            target = parse_target(args.target)
        except InvalidTarget as e:
            parser.error(str(e))
        report = run_scan(config, target=target)

    log_summary(report)
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
