from __future__ import annotations

import logging
from typing import List, Optional

log = logging.getLogger(__name__)

MIN_PORT = 1
MAX_PORT = 65535


def _to_port(text: str) -> Optional[int]:
    if not (text.isascii() and text.isdigit()):
        return None
    # longer tokens can't be a port and would trip int()'s digit limit
    digits = text.lstrip("0") or "0"
    if len(digits) > 5:
        return None
    value = int(digits)
    if value < MIN_PORT or value > MAX_PORT:
        return None
    return value


def parse_ports(spec: str) -> List[int]:
    """
    Parses a port specification string into a list of ports.
    Supports:
    - Everything: "all"
    - Single ports: "80"
    - Ranges: "20-22" (a reversed range like "22-20" yields nothing)
    - Comma-separated and mixed: "22,80,8000-8100"

    Tokens that are not valid ports are dropped without error. Order is kept
    and duplicates are not removed.
    """
    ports: List[int] = []
    for part in spec.split(","):
        part = part.strip()
        if part == "all":
            ports.extend(range(MIN_PORT, MAX_PORT + 1))
        elif "-" in part:
            bounds = part.split("-")
            start = _to_port(bounds[0]) if len(bounds) == 2 else None
            end = _to_port(bounds[1]) if len(bounds) == 2 else None
            if start is None or end is None:
                log.debug("Dropping port range %r", part)
                continue
            ports.extend(range(start, end + 1))
        else:
            port = _to_port(part)
            if port is None:
                log.debug("Dropping port token %r", part)
                continue
            ports.append(port)

    return ports
