"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from oas_schema_compiler.build_pipeline import (
    BuildExecutionError,
    BuildOutcome,
    execute_configured_build,
)
from oas_schema_compiler.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from oas_schema_compiler.dialect_registry import registered_dialects
from oas_schema_compiler.results_writing import write_build_report

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="oas-schema-compiler")
def cli() -> None:
    """OpenAPI schema to JSON Schema compiler."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML build configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML build configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="dialects")
def list_dialects() -> None:
    """List the supported dialects with their aliases and default components."""
    for dialect in registered_dialects():
        aliases = ", ".join(dialect.aliases) or "-"
        components = ", ".join(dialect.default_components)
        click.echo(f"{dialect.version_id}\taliases: {aliases}\tcomponents: {components}")


@cli.command(name="build")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON build configuration file",
)
@click.option(
    "--report",
    "report_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path of an .xlsx build report to write",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log pipeline progress to stderr.",
)
def build(config_path: str, report_path: str | None, verbose: bool) -> None:
    """Compile every configured version into JSON Schema artifacts."""
    if verbose:
        _enable_console_logging()
    try:
        outcome = execute_configured_build(config_path)
    except BuildExecutionError as exc:
        raise CliError(str(exc)) from exc

    _echo_summary(outcome)
    if report_path:
        try:
            written = write_build_report(outcome, report_path)
        except OSError as exc:
            raise CliError(f"Failed to write build report: {exc}") from exc
        click.echo(f"report: {written.resolve()}")
    if outcome.failed_count:
        raise CliError(f"{outcome.failed_count} artifact(s) failed to build.")


def _enable_console_logging() -> None:
    logger = logging.getLogger("oas_schema_compiler")
    logger.setLevel(logging.INFO)
    if any(type(handler) is logging.StreamHandler for handler in logger.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)


def _echo_summary(outcome: BuildOutcome) -> None:
    for version in outcome.versions:
        line = (
            f"{version.version_id}: {version.state.value} "
            f"({len(version.succeeded)} written, {version.failure_count} failed, "
            f"{len(version.warnings)} warnings)"
        )
        click.echo(line)
        for result in version.failed:
            click.echo(f"  {result.name}: {result.error}")
        if version.error:
            click.echo(f"  {version.error}")
    for path in outcome.index_paths:
        click.echo(f"index: {path}")
    click.echo(f"total: {outcome.succeeded_count} written, {outcome.failed_count} failed")


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
