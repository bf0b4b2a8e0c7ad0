"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    DEFAULT_MAX_BATCH_SIZE,
    Configuration,
    KafkaSettings,
    LoggingSettings,
    ProducerSettings,
    SchemaSettings,
)

__all__ = [
    "Configuration",
    "KafkaSettings",
    "LoggingSettings",
    "ProducerSettings",
    "SchemaSettings",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_MAX_BATCH_SIZE",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
