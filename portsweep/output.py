from __future__ import annotations

import logging
import sys
import threading
from typing import Optional, TextIO

from .models import OpenPort, ScanReport

log = logging.getLogger(__name__)


class ConsoleSink:
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self._lock = threading.Lock()

    def emit(self, result: OpenPort) -> None:
        stream = self._stream or sys.stdout
        with self._lock:
            try:
                stream.write(result.line + "\n")
                stream.flush()
            except OSError as e:
                log.error("Error writing to stdout: %s", e)

    def close(self) -> None:
        pass


class FileSink:
    """
    Appends one line per open port to `path`.
    The file is opened on the first open port and kept until close().
    A failed open or write is logged and that line is lost; the scan keeps going.
    """

    def __init__(self, path: str):
        self.path = path
        self._file: Optional[TextIO] = None
        self._lock = threading.Lock()

    def emit(self, result: OpenPort) -> None:
        with self._lock:
            try:
                if self._file is None:
                    self._file = open(self.path, "a", encoding="utf-8")
                self._file.write(result.line + "\n")
                self._file.flush()
            except OSError as e:
                log.error("Error writing to file %s: %s", self.path, e)

    def close(self) -> None:
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None


def make_sink(output: Optional[str]):
    if output:
        return FileSink(output)
    return ConsoleSink()


def log_summary(report: ScanReport) -> None:
    log.info(
        "Time finished: %.4fs elapsed | probes=%d | open=%d | worker errors=%d",
        report.elapsed_s,
        report.probes,
        len(report.open_ports),
        report.worker_errors,
    )
