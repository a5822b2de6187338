from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

DEFAULT_THREADS = 4
DEFAULT_TIMEOUT = 1.0
DEFAULT_PORTS: Tuple[int, ...] = tuple(range(1, 1025))


class ProbeResult(enum.Enum):
    OPEN = "open"
    # refusal and timeout are reported the same way
    CLOSED_OR_FILTERED = "closed_or_filtered"


@dataclass(frozen=True)
class OpenPort:
    target: str
    port: int

    @property
    def line(self) -> str:
        return f"{self.target}: Port {self.port} is open"


@dataclass(frozen=True)
class ScanConfig:
    threads: int = DEFAULT_THREADS
    ports: Tuple[int, ...] = DEFAULT_PORTS
    output: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass
class ScanReport:
    started_at: float = 0.0
    finished_at: float = 0.0
    probes: int = 0
    worker_errors: int = 0
    open_ports: List[OpenPort] = field(default_factory=list)

    @property
    def elapsed_s(self) -> float:
        return round(self.finished_at - self.started_at, 4)
