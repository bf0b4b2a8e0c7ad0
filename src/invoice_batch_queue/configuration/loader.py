"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_CLIENT_ID,
    DEFAULT_MAX_BATCH_SIZE,
    Configuration,
    KafkaSettings,
    LoggingSettings,
    ProducerSettings,
    SchemaSettings,
)

_LOG_LEVELS = frozenset(logging.getLevelNamesMapping())


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Unable to read configuration file {path}: {exc}") from exc
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    return Configuration(
        path=path,
        schema=_parse_schema_section(parsed.get("schema"), path.parent),
        producer=_parse_producer_section(parsed.get("producer")),
        kafka=_parse_kafka_section(parsed.get("kafka")),
        logging=_parse_logging_section(parsed.get("logging")),
    )


def _parse_schema_section(value: Any, base_path: Path) -> SchemaSettings:
    section = _optional_mapping(value, "schema")
    path_value = _optional_string(section.get("path"), "schema.path")
    if path_value is None:
        return SchemaSettings(path=None)
    schema_path = _resolve_path(base_path, path_value)
    if not schema_path.exists():
        raise ConfigurationError(f"Schema file not found: {schema_path}")
    return SchemaSettings(path=schema_path)


def _parse_producer_section(value: Any) -> ProducerSettings:
    section = _optional_mapping(value, "producer")
    max_batch_size = _require_positive_int(
        section.get("max_batch_size", DEFAULT_MAX_BATCH_SIZE), "producer.max_batch_size"
    )
    return ProducerSettings(max_batch_size=max_batch_size)


def _parse_kafka_section(value: Any) -> KafkaSettings:
    section = _require_mapping(value, "kafka")
    bootstrap_servers = _normalize_bootstrap_servers(section.get("bootstrap_servers"))
    topic = _require_non_empty_string(section.get("topic"), "kafka.topic")
    client_id = (
        _optional_string(section.get("client_id"), "kafka.client_id") or DEFAULT_CLIENT_ID
    )
    acks = section.get("acks", "all")
    if isinstance(acks, int) and not isinstance(acks, bool):
        acks = str(acks)
    acks = _require_non_empty_string(acks, "kafka.acks")
    security = section.get("security") or {}
    if not isinstance(security, Mapping):
        raise ConfigurationError("kafka.security must be a mapping.")
    flush_timeout_seconds = _require_positive_int(
        section.get("flush_timeout_seconds", 30), "kafka.flush_timeout_seconds"
    )
    return KafkaSettings(
        bootstrap_servers=bootstrap_servers,
        topic=topic,
        client_id=client_id,
        acks=acks,
        flush_timeout_seconds=flush_timeout_seconds,
        security=dict(security),
    )


def _parse_logging_section(value: Any) -> LoggingSettings:
    section = _optional_mapping(value, "logging")
    level = _require_non_empty_string(section.get("level", "INFO"), "logging.level").upper()
    if level not in _LOG_LEVELS:
        raise ConfigurationError(f"logging.level '{level}' is not a known log level.")
    json_logs = section.get("json", False)
    if not isinstance(json_logs, bool):
        raise ConfigurationError("logging.json must be a boolean.")
    return LoggingSettings(level=level, json_logs=json_logs)


def _normalize_bootstrap_servers(value: Any) -> tuple[str, ...]:
    if value is None:
        raise ConfigurationError("kafka.bootstrap_servers is required.")
    servers: list[str] = []
    if isinstance(value, str):
        servers = [item.strip() for item in value.split(",") if item.strip()]
    elif isinstance(value, Sequence):
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError("kafka.bootstrap_servers entries must be strings.")
            stripped = item.strip()
            if stripped:
                servers.append(stripped)
    else:
        raise ConfigurationError("kafka.bootstrap_servers must be a string or list of strings.")
    if not servers:
        raise ConfigurationError("kafka.bootstrap_servers must contain at least one server.")
    return tuple(servers)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
