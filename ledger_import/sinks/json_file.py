"""JSON Lines sink for exporting ledger events to files."""

import json
from pathlib import Path
from typing import IO

from ledger_import.exceptions import SinkError
from ledger_import.models.base import Event
from ledger_import.sinks.serialization import to_dict


class JsonFileSink:
    """Append ledger events to one JSON Lines file per event type."""

    def __init__(self, output_dir: str | Path) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write ``<event_type>.jsonl`` files into.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self._files: dict[str, IO[str]] = {}
        self._counts: dict[str, int] = {}

    def publish(self, event: Event) -> None:
        """Append one event to its file."""
        handle = self._files.get(event.event_type)
        if handle is None:
            # loan.added -> loan_added.jsonl
            filename = event.event_type.replace(".", "_") + ".jsonl"
            try:
                handle = open(self.output_dir / filename, "a", encoding="utf-8")
            except OSError as e:
                raise SinkError(f"Cannot open {filename} in {self.output_dir}: {e}") from e
            self._files[event.event_type] = handle

        line = json.dumps(to_dict(event), ensure_ascii=False, default=str)
        try:
            handle.write(line + "\n")
        except (OSError, ValueError) as e:
            raise SinkError(f"Cannot write {event.event_type} event: {e}") from e
        self._counts[event.event_type] = self._counts.get(event.event_type, 0) + 1

    def close(self) -> None:
        """Close open files and print summary."""
        for handle in self._files.values():
            handle.close()
        self._files.clear()
        print(f"Event files written to: {self.output_dir}")
        for event_type, count in self._counts.items():
            print(f"  {event_type}: {count} events")
