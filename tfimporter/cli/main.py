from typing import Dict, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape

import tfimporter
from tfimporter import exceptions
from tfimporter.aws_clients import create_session
from tfimporter.cli.constants import (
    LOG_LEVEL_HELP,
    OUTPUT_DIR_HELP,
    RESOURCE_REF_HELP,
    STATE_FILE_HELP,
    STATE_TOOL_HELP,
    VERBOSE_HELP,
)
from tfimporter.cli.utyper import UTyper
from tfimporter.config import config
from tfimporter.descriptors import RESOURCE_TYPES, build_registry
from tfimporter.descriptors.base import ImportAdapter
from tfimporter.flows import import_flows
from tfimporter.flows.import_flows import ImportReport
from tfimporter.flows.reconcile_flows import build_reconcile_report
from tfimporter.logger import logger
from tfimporter.models.enums import LogLevel
from tfimporter.state import load_state

console = Console(soft_wrap=True)

app = UTyper(
    help="Find AWS resources that are not tracked in your terraform state and import them.",
    no_args_is_help=True,
)


@app.callback()
def cli_setup(
    state_file: Optional[str] = typer.Option(None, help=STATE_FILE_HELP),
    output_dir: Optional[str] = typer.Option(None, help=OUTPUT_DIR_HELP),
    state_tool: Optional[str] = typer.Option(None, help=STATE_TOOL_HELP),
    log_level: Optional[LogLevel] = typer.Option(
        None, help=LOG_LEVEL_HELP, case_sensitive=False
    ),
):
    if log_level is not None:
        logger.setLevel(log_level.value)
    config.set_override("state_file", state_file)
    config.set_override("output_dir", output_dir)
    config.set_override("state_tool", state_tool)


def _exit_with_error(e: Exception) -> NoReturn:
    logger.debug("Exception occurred: %s", e, exc_info=True)
    console.print(f"[red]{escape(str(e))}[/red]")
    raise typer.Exit(1)


def _load_registry() -> Dict[str, ImportAdapter]:
    return build_registry(create_session(), config.resource_types)


def _print_import_summary(report: ImportReport):
    if not report.outcomes:
        console.print("Nothing to import.")
        return
    console.print(
        f"\nImported {len(report.committed)} of {len(report.outcomes)} resource(s)."
    )
    if report.failed:
        console.print(
            f"[yellow]{len(report.failed)} import(s) failed, re-run to retry them.[/yellow]"
        )


@app.command("list")
async def list_untracked():
    """List every AWS resource that is not tracked in the state file."""
    try:
        state = load_state(config.state_file)
        registry = _load_registry()
        report = await build_reconcile_report(registry, state)
    except exceptions.TfImporterException as e:
        _exit_with_error(e)

    for resource_info in report.untracked:
        typer.echo(str(resource_info))

    console.print(
        f"\nFound [bold]{len(report.untracked)}[/bold] untracked resource(s), "
        f"{report.tracked_count} already tracked."
    )
    if report.skipped_count:
        console.print(
            f"[yellow]{report.skipped_count} untracked resource(s) have no identifier and cannot be imported.[/yellow]"
        )
    if report.failed_types:
        console.print(
            f"[yellow]Failed to list: {', '.join(report.failed_types)}[/yellow]"
        )


@app.command("import")
async def import_resource(
    resource: str = typer.Argument(..., help=RESOURCE_REF_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_HELP),
):
    """Import a single resource."""
    try:
        registry = _load_registry()
        report = await import_flows.import_one(
            resource,
            registry,
            output_dir=config.output_dir,
            state_tool=config.state_tool,
            verbose=verbose,
            console=console,
        )
    except exceptions.TfImporterException as e:
        _exit_with_error(e)
    _print_import_summary(report)


@app.command("import-all")
async def import_all(
    verbose: bool = typer.Option(False, "--verbose", "-v", help=VERBOSE_HELP),
):
    """Import every resource that is not tracked in the state file."""
    try:
        state = load_state(config.state_file)
        registry = _load_registry()
        reconcile_report = await build_reconcile_report(registry, state)
        console.print(
            f"Found [bold]{len(reconcile_report.untracked)}[/bold] untracked resource(s)."
        )
        report = await import_flows.import_all(
            reconcile_report.untracked,
            registry,
            output_dir=config.output_dir,
            state_tool=config.state_tool,
            verbose=verbose,
            console=console,
        )
    except exceptions.TfImporterException as e:
        _exit_with_error(e)
    _print_import_summary(report)


@app.command()
def types():
    """List the resource types that can be imported."""
    for resource_type in RESOURCE_TYPES:
        typer.echo(resource_type)


@app.command()
def version():
    """Print the version of tfimporter."""
    typer.echo(tfimporter.__version__)


def main():
    app()


if __name__ == "__main__":
    main()
