"""
Diagnostics Collector
=====================

Collects warnings, conflicts and progress events raised while mapping an
installation, and forwards each one to structlog.

Each pipeline stage receives a Diagnostics instance instead of writing to
a global logger only, so callers (and tests) can inspect what was skipped:

    diagnostics = Diagnostics()
    build_area_partition_maps(document, diagnostics)
    for entry in diagnostics.warnings:
        print(entry.event, entry.context)
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog

log = structlog.get_logger()

DEBUG = "debug"
INFO = "info"
WARNING = "warning"
ERROR = "error"


@dataclass
class DiagnosticEntry:
    """A single recorded event."""
    level: str
    event: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Diagnostics:
    """
    In-memory diagnostics sink.

    Entries are kept in order of emission. When `forward` is True every
    entry is also logged through structlog with its context as key/values.
    """

    def __init__(self, logger: Optional[Any] = None, forward: bool = True):
        self._log = logger or log
        self._forward = forward
        self.entries: List[DiagnosticEntry] = []

    def record(self, level: str, event: str, message: str, **context: Any) -> DiagnosticEntry:
        entry = DiagnosticEntry(level=level, event=event, message=message, context=context)
        self.entries.append(entry)
        if self._forward:
            getattr(self._log, level)(message, event_name=event, **context)
        return entry

    def debug(self, event: str, message: str, **context: Any) -> DiagnosticEntry:
        return self.record(DEBUG, event, message, **context)

    def info(self, event: str, message: str, **context: Any) -> DiagnosticEntry:
        return self.record(INFO, event, message, **context)

    def warning(self, event: str, message: str, **context: Any) -> DiagnosticEntry:
        return self.record(WARNING, event, message, **context)

    def error(self, event: str, message: str, **context: Any) -> DiagnosticEntry:
        return self.record(ERROR, event, message, **context)

    @property
    def warnings(self) -> List[DiagnosticEntry]:
        return [e for e in self.entries if e.level == WARNING]

    @property
    def errors(self) -> List[DiagnosticEntry]:
        return [e for e in self.entries if e.level == ERROR]

    def events(self, event: str) -> List[DiagnosticEntry]:
        """All entries with the given event name."""
        return [e for e in self.entries if e.event == event]

    def has_event(self, event: str) -> bool:
        return any(e.event == event for e in self.entries)

    def clear(self) -> None:
        self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return (
            f"<Diagnostics(entries={len(self.entries)}, "
            f"warnings={len(self.warnings)}, errors={len(self.errors)})>"
        )


def ensure_diagnostics(diagnostics: Optional[Diagnostics]) -> Diagnostics:
    """Return diagnostics, or a fresh collector when None."""
    return diagnostics if diagnostics is not None else Diagnostics()
