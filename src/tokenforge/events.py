"""Synthesis event stream.

A one-way, fire-and-forget channel from the engine to an external
observer (a plugin UI, the CLI, a test). Four event kinds exist:

- ``progress(percent, message)``
- ``log(message, level)``
- ``done(stats)``
- ``error(message)``

Usage::

    events = SynthesisEvents()
    events.subscribe(lambda event: print(event.kind, event.message))
    events.progress(0, "Creating Primitives collection...")
    events.log("  Primitives: 42 variables", level="done")

Every event is appended to ``history`` and mirrored to the
``tokenforge.events`` logger. Subscriber failures never reach the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger("tokenforge.events")

# Event log levels understood by observers
LEVEL_INFO = ""
LEVEL_DONE = "done"
LEVEL_WARN = "warn"
LEVEL_ERROR = "err"

_PY_LEVELS: dict[str, int] = {
    LEVEL_INFO: logging.INFO,
    LEVEL_DONE: logging.INFO,
    LEVEL_WARN: logging.WARNING,
    LEVEL_ERROR: logging.ERROR,
}


@dataclass
class SynthesisEvent:
    """One entry in the event stream."""

    kind: str  # "progress" | "log" | "done" | "error"
    message: str = ""
    level: str = LEVEL_INFO
    percent: float | None = None
    stats: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind}
        if self.kind == "progress":
            data["percent"] = self.percent
            data["message"] = self.message
        elif self.kind == "log":
            data["message"] = self.message
            data["level"] = self.level
        elif self.kind == "done":
            data["stats"] = dict(self.stats)
        else:
            data["message"] = self.message
        return data


Subscriber = Callable[[SynthesisEvent], None]


class SynthesisEvents:
    """Append-only event stream with optional subscribers.

    There is no backpressure: ``emit`` records the event, notifies each
    subscriber once, and returns.
    """

    def __init__(self, *, record: bool = True, subscribers: list[Subscriber] | None = None):
        self._record = record
        self._subscribers: list[Subscriber] = list(subscribers or [])
        self.history: list[SynthesisEvent] = []

    def subscribe(self, subscriber: Subscriber) -> None:
        self._subscribers.append(subscriber)

    # --------------------------------------------------------------------- #
    # Event API
    # --------------------------------------------------------------------- #

    def progress(self, percent: float, message: str) -> None:
        """Report percent-complete with a human-readable message."""
        logger.debug("[%3.0f%%] %s", percent, message)
        self._emit(SynthesisEvent(kind="progress", message=message, percent=percent))

    def log(self, message: str, level: str = LEVEL_INFO) -> None:
        """Report a log line. Levels: "" (info), "done", "warn", "err"."""
        logger.log(_PY_LEVELS.get(level, logging.INFO), "%s", message)
        self._emit(SynthesisEvent(kind="log", message=message, level=level))

    def done(self, stats: dict[str, int]) -> None:
        logger.info("Synthesis finished: %s", stats)
        self._emit(SynthesisEvent(kind="done", stats=dict(stats)))

    def error(self, message: str) -> None:
        logger.error("%s", message)
        self._emit(SynthesisEvent(kind="error", message=message, level=LEVEL_ERROR))

    # --------------------------------------------------------------------- #
    # Queries (used by the CLI and tests)
    # --------------------------------------------------------------------- #

    def of_kind(self, kind: str) -> list[SynthesisEvent]:
        return [e for e in self.history if e.kind == kind]

    def logs(self, level: str | None = None) -> list[SynthesisEvent]:
        return [e for e in self.of_kind("log") if level is None or e.level == level]

    @property
    def failed(self) -> bool:
        return any(e.kind == "error" for e in self.history)

    # --------------------------------------------------------------------- #
    # Internal
    # --------------------------------------------------------------------- #

    def _emit(self, event: SynthesisEvent) -> None:
        if self._record:
            self.history.append(event)
        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception:
                logger.debug("Event subscriber failed for %s event", event.kind, exc_info=True)


# Shared silent stream, avoids None checks in stage functions
_NOOP = SynthesisEvents(record=False)


def noop() -> SynthesisEvents:
    """Return a no-op event stream (safe to call methods on, records nothing)."""
    return _NOOP
