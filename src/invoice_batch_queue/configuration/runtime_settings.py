"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_MAX_BATCH_SIZE = 10
DEFAULT_CLIENT_ID = "invoice-batch-queue"


@dataclass(frozen=True)
class SchemaSettings:
    """Where to load the invoice schema from. ``None`` selects the bundled schema."""

    path: Path | None = None


@dataclass(frozen=True)
class ProducerSettings:
    """Batch producer policy."""

    max_batch_size: int = DEFAULT_MAX_BATCH_SIZE


@dataclass(frozen=True)
class KafkaSettings:
    """Kafka producer configuration."""

    bootstrap_servers: tuple[str, ...]
    topic: str
    client_id: str = DEFAULT_CLIENT_ID
    acks: str = "all"
    flush_timeout_seconds: int = 30
    security: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class LoggingSettings:
    """Log output configuration."""

    level: str = "INFO"
    json_logs: bool = False


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    schema: SchemaSettings
    producer: ProducerSettings
    kafka: KafkaSettings
    logging: LoggingSettings
