"""Console sink for debugging and development."""

import json
from typing import Any

from ledger_import.models.base import Event
from ledger_import.sinks.serialization import to_dict


class ConsoleSink:
    """Print ledger events to stdout."""

    def __init__(self, pretty: bool = True, max_events: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_events : int | None
            Maximum events to print per event type (None for all).
        """
        self.pretty = pretty
        self.max_events = max_events
        self._counts: dict[str, int] = {}

    def publish(self, event: Event) -> None:
        """Print a single event."""
        seen = self._counts.get(event.event_type, 0)
        self._counts[event.event_type] = seen + 1

        if self.max_events is not None and seen >= self.max_events:
            return

        data: dict[str, Any] = to_dict(event)
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(json.dumps(data, ensure_ascii=False, default=str))

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for event_type, count in self._counts.items():
            print(f"  {event_type}: {count} events")
