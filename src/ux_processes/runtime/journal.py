"""Append-only JSON-lines journal of one process run."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

RUN_CREATED = "RUN_CREATED"
RUN_COMPLETED = "RUN_COMPLETED"
RUN_FAILED = "RUN_FAILED"
EFFECT_REQUESTED = "EFFECT_REQUESTED"
EFFECT_RESOLVED = "EFFECT_RESOLVED"
EFFECT_FAILED = "EFFECT_FAILED"
BREAKPOINT_REQUESTED = "BREAKPOINT_REQUESTED"
BREAKPOINT_RESOLVED = "BREAKPOINT_RESOLVED"
PROCESS_LOG = "PROCESS_LOG"


@dataclass(slots=True)
class JournalEvent:
    """One journal record."""

    seq: int
    type: str
    recorded_at: str
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "seq": self.seq,
            "type": self.type,
            "recorded_at": self.recorded_at,
            "data": self.data,
        }


class RunJournal:
    """Thread-safe event journal; persisted to ``path`` when one is given."""

    def __init__(self, path: Path | None, *, clock: Callable[[], datetime]) -> None:
        self.path = path
        self._clock = clock
        self._lock = threading.Lock()
        self._events: list[JournalEvent] = []
        if path is not None:
            path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, event_type: str, data: dict[str, Any] | None = None) -> JournalEvent:
        with self._lock:
            event = JournalEvent(
                seq=len(self._events) + 1,
                type=event_type,
                recorded_at=self._clock().isoformat(),
                data=dict(data or {}),
            )
            self._events.append(event)
            if self.path is not None:
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(json.dumps(event.to_dict(), ensure_ascii=False, sort_keys=True))
                    handle.write("\n")
        logger.debug("journal #%s %s", event.seq, event_type)
        return event

    def events(self) -> list[JournalEvent]:
        with self._lock:
            return list(self._events)


def load_journal(path: Path) -> list[JournalEvent]:
    """Read a persisted journal back in sequence order."""

    events: list[JournalEvent] = []
    for line_no, line in enumerate(path.read_text("utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        raw = json.loads(line)
        if not isinstance(raw, dict):
            raise TypeError(f"Expected JSON object on line {line_no} of {path}")
        events.append(
            JournalEvent(
                seq=int(raw["seq"]),
                type=str(raw["type"]),
                recorded_at=str(raw["recorded_at"]),
                data=dict(raw.get("data") or {}),
            ),
        )
    return sorted(events, key=lambda event: event.seq)
