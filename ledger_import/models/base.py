"""Base models shared across the ledger."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Event:
    """Notification envelope published when the registry commits an entity."""

    event_id: str
    event_type: str  # entity.action (e.g., loan.added)
    event_time: datetime
    source: str  # Component that committed the entity
    subject: str  # Entity ID affected
    data: dict
    metadata: dict = field(default_factory=dict)
