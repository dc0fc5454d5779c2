"""Scope timing written as a Chrome-trace JSON file."""

from __future__ import annotations

import atexit
import threading
import time
from dataclasses import dataclass
from typing import IO, ClassVar

from emerald.log import core_logger


@dataclass(frozen=True)
class ProfileResult:
    """One timed scope: start in microseconds, elapsed in whole microseconds."""

    name: str
    start: float
    elapsed_time: int
    thread_id: int


class Instrumentor:
    """Writes profile results of one session at a time into a trace file."""

    _instance: ClassVar[Instrumentor | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._session: str | None = None
        self._stream: IO[str] | None = None

    @classmethod
    def get(cls) -> Instrumentor:
        """Return the process-wide instrumentor."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
                atexit.register(cls._instance.end_session)
            return cls._instance

    @property
    def session_name(self) -> str | None:
        return self._session

    def begin_session(self, name: str, filepath: str = "results.json") -> None:
        """Open a new session, closing any session that is still open."""
        with self._lock:
            if self._session is not None:
                core_logger().error(
                    "Instrumentor::BeginSession('%s') when session '%s' already open.",
                    name,
                    self._session,
                )
                self._end_session_locked()
            try:
                self._stream = open(filepath, "w", encoding="utf-8")
            except OSError:
                self._stream = None
                core_logger().error(
                    "Instrumentor could not open results file '%s'.", filepath
                )
                return
            self._session = name
            self._stream.write('{"otherData": {},"traceEvents":[{}')
            self._stream.flush()

    def end_session(self) -> None:
        """Finish the current session, if any, and close its file."""
        with self._lock:
            self._end_session_locked()

    def write_profile(self, result: ProfileResult) -> None:
        """Append one result to the open session; dropped if none is open."""
        entry = (
            ',{"cat":"function",'
            f'"dur":{result.elapsed_time},'
            f'"name":"{result.name}",'
            '"ph":"X",'
            '"pid":0,'
            f'"tid":{result.thread_id},'
            f'"ts":{result.start:.3f}'
            "}"
        )
        with self._lock:
            if self._session is not None and self._stream is not None:
                self._stream.write(entry)
                self._stream.flush()

    def _end_session_locked(self) -> None:
        if self._session is None or self._stream is None:
            return
        self._stream.write("]}")
        self._stream.flush()
        self._stream.close()
        self._stream = None
        self._session = None


class InstrumentationTimer:
    """Times a scope from construction until ``stop`` or the end of a ``with`` block."""

    def __init__(self, name: str, instrumentor: Instrumentor | None = None) -> None:
        self.name = name
        self._instrumentor = instrumentor
        self._start_ns = time.monotonic_ns()
        self.stopped = False

    def stop(self) -> None:
        """Record the elapsed time; later calls do nothing."""
        if self.stopped:
            return
        end_ns = time.monotonic_ns()
        high_res_start = self._start_ns / 1000.0
        elapsed = end_ns // 1000 - self._start_ns // 1000
        target = self._instrumentor or Instrumentor.get()
        target.write_profile(
            ProfileResult(self.name, high_res_start, elapsed, threading.get_ident())
        )
        self.stopped = True

    def __enter__(self) -> InstrumentationTimer:
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def cleanup_output_string(expr: str, remove: str) -> str:
    """Strip occurrences of ``remove`` from ``expr`` and turn double quotes into single ones.

    After a removal the next character is always kept, so back-to-back
    occurrences lose only the first.
    """
    out: list[str] = []
    position = 0
    length = len(expr)
    while position < length:
        if remove and expr.startswith(remove, position):
            position += len(remove)
            if position >= length:
                break
        char = expr[position]
        out.append("'" if char == '"' else char)
        position += 1
    return "".join(out)