"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Publisher configuration template for invoice-batch-queue.
# Replace every <REQUIRED> placeholder before running publish.
# Remove <OPTIONAL> entries you do not need; defaults apply when they are absent.

schema:
  # Path to a JSON schema with billing_address and line_item definitions.
  # Leave unset to use the invoice schema bundled with the package.
  # path: "<OPTIONAL>"

producer:
  # Number of invoices sent per batch.
  max_batch_size: 10

kafka:
  bootstrap_servers:
    - "<REQUIRED>"
  topic: "<REQUIRED>"
  # client_id: "<OPTIONAL>"
  # acks: "<OPTIONAL>"
  # flush_timeout_seconds: "<OPTIONAL>"
  # security:
  #   sasl.username: "<OPTIONAL>"
  #   sasl.password: "<OPTIONAL>"
  #   security.protocol: "<OPTIONAL>"
  #   sasl.mechanisms: "<OPTIONAL>"

logging:
  level: INFO
  json: false
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
