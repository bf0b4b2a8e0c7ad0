"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

import invoice_batch_queue.run_execution.publish_run_use_case as use_case_module
import pytest
from click.testing import CliRunner
from invoice_batch_queue.batch_publishing import DeliveryOutcome
from invoice_batch_queue.cli import cli


@pytest.fixture(autouse=True)
def logging_calls(monkeypatch) -> list[tuple[str, bool]]:
    calls: list[tuple[str, bool]] = []
    monkeypatch.setattr(
        use_case_module,
        "configure_logging",
        lambda level, json_logs: calls.append((level, json_logs)),
    )
    return calls


def _write_config(tmp_path: Path) -> Path:
    config = {
        "producer": {"max_batch_size": 2},
        "kafka": {"bootstrap_servers": "localhost:9092", "topic": "invoices"},
        "logging": {"level": "WARNING"},
    }
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def _write_invoices(tmp_path: Path, documents: list[dict]) -> Path:
    path = tmp_path / "invoices.json"
    path.write_text(json.dumps(documents), encoding="utf-8")
    return path


def test_generate_config_command_writes_placeholder_file_with_default_name(tmp_path: Path) -> None:
    runner = CliRunner()
    with runner.isolated_filesystem(temp_dir=str(tmp_path)):
        result = runner.invoke(cli, ["generate-config"])
        output_path = Path("config.yaml").resolve()

        assert result.exit_code == 0
        assert output_path.exists()
        content = output_path.read_text(encoding="utf-8")
        assert "producer:" in content
        assert "kafka:" in content
        assert "<REQUIRED>" in content
        assert str(output_path) in result.output


def test_generate_config_command_refuses_to_overwrite(tmp_path: Path) -> None:
    existing = tmp_path / "config.yaml"
    existing.write_text("kept", encoding="utf-8")

    result = CliRunner().invoke(cli, ["generate-config", "--output", str(existing)])

    assert result.exit_code != 0
    assert "already exists" in str(result.exception)
    assert existing.read_text(encoding="utf-8") == "kept"


def test_validate_command_lists_results(tmp_path: Path, invoice_document) -> None:
    input_path = _write_invoices(tmp_path, [invoice_document(invoice_id="A")])

    result = CliRunner().invoke(cli, ["validate", "--input", str(input_path)])

    assert result.exit_code == 0
    assert "A: ok" in result.output


def test_validate_command_fails_on_invalid_invoice(tmp_path: Path, invoice_document) -> None:
    broken = invoice_document(invoice_id="B")
    del broken["items"][0]["sku"]
    input_path = _write_invoices(tmp_path, [invoice_document(invoice_id="A"), broken])

    result = CliRunner().invoke(cli, ["validate", "--input", str(input_path)])

    assert result.exit_code != 0
    assert "B: items.0.sku: The property sku is required" in result.output
    assert "1 of 2 invoices failed validation" in str(result.exception)


def test_publish_command_dry_run_reports_batches(
    tmp_path: Path, invoice_document, logging_calls
) -> None:
    config_path = _write_config(tmp_path)
    input_path = _write_invoices(
        tmp_path, [invoice_document(invoice_id=name) for name in ("A", "B", "C")]
    )

    result = CliRunner().invoke(
        cli,
        ["publish", "--config", str(config_path), "--input", str(input_path), "--dry-run"],
    )

    assert result.exit_code == 0
    assert "loaded=3 sent=0 failed=0 batches=2 dry-run" in result.output
    assert logging_calls == [("WARNING", False)]


def test_publish_command_uses_kafka_transport(
    tmp_path: Path, invoice_document, monkeypatch
) -> None:
    sent_batches: list[list[str]] = []

    class FakeKafkaTransport:
        def __init__(self, kafka_settings) -> None:
            assert kafka_settings.topic == "invoices"

        def send_batch(self, entries):
            sent_batches.append([entry.key for entry in entries])
            return [DeliveryOutcome.sent(entry.entry_id) for entry in entries]

    monkeypatch.setattr(use_case_module, "KafkaBatchTransport", FakeKafkaTransport)
    config_path = _write_config(tmp_path)
    input_path = _write_invoices(
        tmp_path, [invoice_document(invoice_id=name) for name in ("A", "B", "C")]
    )

    result = CliRunner().invoke(
        cli, ["publish", "--config", str(config_path), "--input", str(input_path)]
    )

    assert result.exit_code == 0
    assert sent_batches == [["A", "B"], ["C"]]
    assert "loaded=3 sent=3 failed=0 batches=2" in result.output


def test_publish_command_fails_when_deliveries_fail(
    tmp_path: Path, invoice_document, monkeypatch
) -> None:
    class RejectingTransport:
        def __init__(self, kafka_settings) -> None:
            pass

        def send_batch(self, entries):
            return [DeliveryOutcome.failed(entry.entry_id, "rejected") for entry in entries]

    monkeypatch.setattr(use_case_module, "KafkaBatchTransport", RejectingTransport)
    config_path = _write_config(tmp_path)
    input_path = _write_invoices(tmp_path, [invoice_document()])

    result = CliRunner().invoke(
        cli, ["publish", "--config", str(config_path), "--input", str(input_path)]
    )

    assert result.exit_code != 0
    assert "1 invoices could not be delivered" in str(result.exception)
