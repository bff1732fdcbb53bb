"""CLI entrypoint for ux-processes."""

import logging
from pathlib import Path

import rich_click as click

from ux_processes import __version__
from ux_processes.config import APPROVAL_MODES, SUPPORTED_AGENTS
from ux_processes.controllers import (
    CatalogIndexCommand,
    CatalogSearchCommand,
    ProcessCliController,
    ProcessListCommand,
    ProcessRunCommand,
    ProcessShowCommand,
)
from ux_processes.processes import UnknownProcessError
from ux_processes.processes._common import ProcessInputError
from ux_processes.runtime.context import BreakpointRejected, EffectExecutionError

click.rich_click.USE_MARKDOWN = True
PROCESS_CONTROLLER = ProcessCliController()


@click.group()
@click.version_option(version=__version__, prog_name="ux-processes")
@click.option("--verbose", "-v", is_flag=True, help="Log runtime progress to stderr.")
def ux_processes(verbose: bool) -> None:
    """UX/UI design process runner."""

    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@ux_processes.group()
def process() -> None:
    """Process commands."""


@process.command("list")
@click.option("--descriptions", is_flag=True, help="Print each process description.")
def process_list(descriptions: bool) -> None:
    """List registered processes."""

    _emit_lines(PROCESS_CONTROLLER.list_processes(ProcessListCommand(verbose=descriptions)))


@process.command("show")
@click.argument("process_id")
def process_show(process_id: str) -> None:
    """Show docstring metadata and task names of one process."""

    try:
        lines = PROCESS_CONTROLLER.show_process(ProcessShowCommand(process_id=process_id))
    except UnknownProcessError as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(lines)


@process.command("run")
@click.argument("process_id")
@click.option(
    "--inputs",
    "inputs_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON file with process inputs.",
)
@click.option(
    "--set",
    "overrides",
    multiple=True,
    help="Input override `key=value`; the value is parsed as JSON when possible. Repeatable.",
)
@click.option(
    "--agent",
    type=click.Choice(SUPPORTED_AGENTS, case_sensitive=False),
    default=None,
    help="Agent for every task; defaults to UX_PROCESSES_DEFAULT_AGENT.",
)
@click.option(
    "--approval",
    type=click.Choice(APPROVAL_MODES, case_sensitive=False),
    default=None,
    help="How breakpoints are answered; defaults to UX_PROCESSES_APPROVAL_MODE.",
)
@click.option(
    "--workdir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Root directory for run folders.",
)
def process_run(  # noqa: PLR0913
    process_id: str,
    inputs_path: Path | None,
    overrides: tuple[str, ...],
    agent: str | None,
    approval: str | None,
    workdir: Path | None,
) -> None:
    """Run one process on the local runtime and save `result.json`."""

    try:
        lines = PROCESS_CONTROLLER.run(
            ProcessRunCommand(
                process_id=process_id,
                inputs_path=inputs_path,
                overrides=overrides,
                agent=agent,
                approval=approval,
                workdir=workdir,
            ),
        )
    except BreakpointRejected as error:
        raise click.ClickException(f"Run stopped: {error}") from error
    except EffectExecutionError as error:
        raise click.ClickException(f"Task failed: {error}") from error
    except (UnknownProcessError, ProcessInputError, ValueError) as error:
        raise click.ClickException(str(error)) from error
    _emit_lines(lines)


@ux_processes.group()
def catalog() -> None:
    """Process catalog commands."""


@catalog.command("index")
@click.option("--db-path", type=click.Path(path_type=Path), default=None, help="SQLite DB path.")
def catalog_index(db_path: Path | None) -> None:
    """Rebuild the catalog from process docstrings."""

    _emit_lines(PROCESS_CONTROLLER.index_catalog(CatalogIndexCommand(db_path=db_path)))


@catalog.command("search")
@click.argument("query")
@click.option("--category", default=None, help="Only processes of this category.")
@click.option(
    "--limit",
    type=click.IntRange(min=1, max=200),
    default=20,
    show_default=True,
    help="Max number of matches to print.",
)
@click.option("--db-path", type=click.Path(path_type=Path), default=None, help="SQLite DB path.")
def catalog_search(query: str, category: str | None, limit: int, db_path: Path | None) -> None:
    """Search the catalog by process id, description and category."""

    _emit_lines(
        PROCESS_CONTROLLER.search_catalog(
            CatalogSearchCommand(
                query=query,
                category=category,
                limit=limit,
                db_path=db_path,
            ),
        ),
    )


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


if __name__ == "__main__":  # pragma: no cover
    ux_processes()
