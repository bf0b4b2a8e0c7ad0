"""Command line interface entry point."""

from __future__ import annotations

import sys

import click

from invoice_batch_queue.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from invoice_batch_queue.run_execution import (
    PublishRequest,
    RunExecutionError,
    check_invoice_documents,
    execute_publish_run,
    format_invoice_checks,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="invoice-batch-queue")
def cli() -> None:
    """Validate invoices and publish them to Kafka in batches."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="validate")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON/YAML file holding a list of invoices",
)
@click.option(
    "--schema",
    "schema_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional JSON schema replacing the bundled invoice schema",
)
def validate(input_path: str, schema_path: str | None) -> None:
    """Check every invoice in the input file against the schema."""
    try:
        checks = check_invoice_documents(input_path, schema_path)
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for line in format_invoice_checks(checks):
        click.echo(line)
    invalid = sum(1 for check in checks if not check.valid)
    if invalid:
        raise CliError(f"{invalid} of {len(checks)} invoices failed validation.")


@cli.command(name="publish")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON/YAML file holding a list of invoices",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Validate and batch invoices without producing to Kafka.",
)
def publish(config_path: str, input_path: str, dry_run: bool) -> None:
    """Validate the invoices in the input file and publish them in batches."""
    try:
        outcome = execute_publish_run(
            PublishRequest(
                config_path=config_path,
                input_path=input_path,
                dry_run=dry_run,
                configure_logs=True,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(
        f"loaded={outcome.loaded} sent={outcome.sent} failed={outcome.failed} "
        f"batches={outcome.batches}{' dry-run' if outcome.dry_run else ''}"
    )
    if outcome.failed:
        raise CliError(f"{outcome.failed} invoices could not be delivered.")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
