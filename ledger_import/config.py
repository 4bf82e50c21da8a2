"""Configuration management for ledger-import."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from ledger_import.exceptions import ConfigurationError
from ledger_import.models.ledger.settings import LedgerSettings

EVENT_SINKS = ("none", "console", "json", "kafka")


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration for file-based event sinks."""

    events_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for ledger-import."""

    settings: LedgerSettings = field(default_factory=LedgerSettings)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    event_sink: str = "none"
    topic_prefix: str = "dev.ledger"
    seed: int | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.event_sink not in EVENT_SINKS:
            raise ConfigurationError(
                f"Unknown event sink {self.event_sink!r}, expected one of {', '.join(EVENT_SINKS)}"
            )

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        defaults = LedgerSettings()
        settings = LedgerSettings(
            loan_types=_split_list(os.getenv("LOAN_TYPES")) or defaults.loan_types,
            payment_channels=(
                _split_list(os.getenv("PAYMENT_CHANNELS")) or defaults.payment_channels
            ),
            loan_number_prefix=os.getenv("LOAN_NUMBER_PREFIX", defaults.loan_number_prefix),
            loan_number_suffix=os.getenv("LOAN_NUMBER_SUFFIX", defaults.loan_number_suffix),
            default_interest_rate=_env_decimal(
                "DEFAULT_INTEREST_RATE", defaults.default_interest_rate
            ),
            next_loan_number=_env_int("NEXT_LOAN_NUMBER", defaults.next_loan_number),
        )
        if settings.next_loan_number < 1:
            raise ConfigurationError("NEXT_LOAN_NUMBER must be at least 1")

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            events_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        seed = os.getenv("SEED")

        return cls(
            settings=settings,
            kafka=kafka,
            output=output,
            event_sink=os.getenv("EVENT_SINK", "none").lower(),
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.ledger"),
            seed=_env_int("SEED", 0) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _split_list(raw: str | None) -> list[str]:
    """Split a comma-separated env value, dropping blanks."""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_int(name: str, default: int) -> int:
    import os

    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _env_decimal(name: str, default: Decimal) -> Decimal:
    import os

    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = Decimal(raw.strip())
    except InvalidOperation as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if not value.is_finite() or value < 0:
        raise ConfigurationError(f"{name} must be a non-negative number, got {raw!r}")
    return value
