"""Event sinks that receive registry notifications."""

from typing import TYPE_CHECKING, Protocol

from ledger_import.models.base import Event
from ledger_import.sinks.console import ConsoleSink
from ledger_import.sinks.json_file import JsonFileSink

if TYPE_CHECKING:
    from ledger_import.config import LedgerConfig


class EventChannel(Protocol):
    """Anything that accepts registry events."""

    def publish(self, event: Event) -> None: ...

    def close(self) -> None: ...


def create_sink(config: "LedgerConfig") -> EventChannel | None:
    """Build the event sink selected by ``config.event_sink``."""
    if config.event_sink == "console":
        return ConsoleSink(pretty=config.output.pretty_json)
    if config.event_sink == "json":
        return JsonFileSink(config.output.events_dir)
    if config.event_sink == "kafka":
        from ledger_import.sinks.kafka import KafkaSink

        return KafkaSink(config.kafka, topic_prefix=config.topic_prefix)
    return None


__all__ = ["ConsoleSink", "EventChannel", "JsonFileSink", "create_sink"]
