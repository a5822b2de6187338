from __future__ import annotations

import threading
from typing import Iterable, List, Optional


class WorkQueue:
    """
    Pending ports for one target, shared by that target's workers.
    claim() checks for emptiness and removes a port in one locked step, so a
    port is never handed to two workers and none is skipped.
    """

    def __init__(self, ports: Iterable[int]):
        self._ports: List[int] = list(ports)
        self._lock = threading.Lock()

    def claim(self) -> Optional[int]:
        with self._lock:
            if not self._ports:
                return None
            return self._ports.pop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._ports)
