from __future__ import annotations

import ipaddress
from typing import List, Union

Target = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class InvalidTarget(ValueError):
    pass


def parse_target(text: str) -> Target:
    """
    Supports:
      - IPv4: "172.20.0.10"
      - IPv6: "::1", "fe80::1"
    Hostnames and CIDR blocks are rejected.
    """
    try:
        return ipaddress.ip_address(text)
    except ValueError as e:
        raise InvalidTarget(f"Invalid IP address: {text!r}") from e


def read_targets(path: str) -> List[str]:
    # Lines are returned as-is (minus the line ending); blank or malformed
    # lines fail later when a worker parses them.
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\r\n") for line in f]
