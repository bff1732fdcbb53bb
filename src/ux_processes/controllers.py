"""Controllers for process and catalog CLI commands."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ux_processes.catalog.docblock import parse_docblock
from ux_processes.catalog.indexer import build_entries
from ux_processes.catalog.repository import CatalogRepository
from ux_processes.config import Settings
from ux_processes.orchestrate import orchestrate, run_process
from ux_processes.processes import get_process, list_processes
from ux_processes.processes._common import ProcessInputError

_SUMMARY_ARTIFACTS_LIMIT = 10


@dataclass(slots=True)
class ProcessListCommand:
    """CLI input for process listing."""

    verbose: bool = False


@dataclass(slots=True)
class ProcessShowCommand:
    """CLI input for process inspection."""

    process_id: str


@dataclass(slots=True)
class ProcessRunCommand:
    """CLI input for one local process run."""

    process_id: str
    inputs_path: Path | None
    overrides: tuple[str, ...]
    agent: str | None
    approval: str | None
    workdir: Path | None


@dataclass(slots=True)
class CatalogIndexCommand:
    """CLI input for catalog (re)indexing."""

    db_path: Path | None


@dataclass(slots=True)
class CatalogSearchCommand:
    """CLI input for catalog search."""

    query: str
    category: str | None
    limit: int
    db_path: Path | None


class ProcessCliController:
    """Thin adapter between click commands and the process runtime."""

    def list_processes(self, command: ProcessListCommand) -> list[str]:
        entries = list_processes()
        lines = [f"Processes: {len(entries)}"]
        for entry in entries:
            docblock = parse_docblock(entry.docstring)
            description = docblock.description if docblock is not None else ""
            lines.append(f"- {entry.process_id}")
            if command.verbose and description:
                lines.append(f"  {description}")
        return lines

    def show_process(self, command: ProcessShowCommand) -> list[str]:
        entry = get_process(command.process_id)
        docblock = parse_docblock(entry.docstring)
        lines = [
            f"Process: {entry.process_id}",
            f"Module: {entry.module}",
        ]
        if docblock is not None:
            lines.append(f"Description: {docblock.description or '-'}")
            lines.append(f"Inputs: {docblock.inputs or '-'}")
            lines.append(f"Outputs: {docblock.outputs or '-'}")
        task_names = entry.tasks.names()
        lines.append(f"Tasks: {len(task_names)}")
        lines.extend(f"- {name}" for name in task_names)
        return lines

    def run(self, command: ProcessRunCommand) -> list[str]:
        inputs = load_inputs(command.inputs_path)
        inputs.update(parse_overrides(command.overrides))

        settings = Settings.from_env(workdir_root=command.workdir)
        if command.agent:
            settings.agents.default_agent = command.agent.strip().lower()
        if command.approval:
            settings.runtime.approval_mode = command.approval.strip().lower()

        runner = orchestrate if settings.runtime.use_prefect else run_process
        outcome = runner(command.process_id, inputs, settings=settings)
        result = outcome.result
        artifacts = result.get("artifacts") or []
        lines = [
            f"Run completed: {outcome.run_id}",
            f"Process: {outcome.process_id}",
            f"Success: {'yes' if result.get('success') else 'no'}",
        ]
        if result.get("reason") or result.get("error"):
            lines.append(f"Reason: {result.get('reason') or result.get('error')}")
        if result.get("duration") is not None:
            lines.append(f"Duration: {result['duration']}ms")
        lines.append(f"Artifacts: {len(artifacts)}")
        for artifact in artifacts[:_SUMMARY_ARTIFACTS_LIMIT]:
            if isinstance(artifact, dict):
                lines.append(f"- {artifact.get('path', '-')} ({artifact.get('format', '-')})")
        if len(artifacts) > _SUMMARY_ARTIFACTS_LIMIT:
            lines.append(f"- ... {len(artifacts) - _SUMMARY_ARTIFACTS_LIMIT} more")
        lines.append(f"Result saved: {outcome.result_path}")
        return lines

    def index_catalog(self, command: CatalogIndexCommand) -> list[str]:
        settings = Settings.from_env(db_path=command.db_path)
        entries = build_entries(list_processes())
        with _repository(settings) as repository:
            indexed = repository.index_processes(entries)
            categories = repository.list_categories()
        lines = [f"Catalog indexed: {indexed} processes into {settings.catalog.db_path}"]
        lines.extend(f"- {category}: {count}" for category, count in categories)
        return lines

    def search_catalog(self, command: CatalogSearchCommand) -> list[str]:
        settings = Settings.from_env(db_path=command.db_path)
        with _repository(settings) as repository:
            entries = repository.search(
                command.query,
                category=command.category,
                limit=command.limit,
            )
            indexed_at = repository.last_indexed_at()
        if indexed_at is None:
            return ["Catalog is empty. Run `ux-processes catalog index` first."]
        if not entries:
            return [f"No processes match {command.query!r}."]
        lines = [f"Matches: {len(entries)}"]
        for entry in entries:
            lines.append(f"- {entry.process_id} [{entry.category}] tasks={len(entry.tasks)}")
            if entry.description:
                lines.append(f"  {entry.description}")
        return lines


def load_inputs(path: Path | None) -> dict[str, Any]:
    """Read a JSON object of process inputs; an absent path means no inputs."""

    if path is None:
        return {}
    try:
        payload = json.loads(path.read_text("utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise ProcessInputError(f"Cannot read inputs file {path}: {error}") from error
    if not isinstance(payload, dict):
        raise ProcessInputError(f"Inputs file {path} must contain a JSON object.")
    return payload


def parse_overrides(overrides: tuple[str, ...]) -> dict[str, Any]:
    """Parse ``key=value`` pairs; values are JSON when they parse, strings otherwise."""

    parsed: dict[str, Any] = {}
    for raw in overrides:
        key, sep, value = raw.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ProcessInputError(f"Invalid --set value: {raw!r}. Expected key=value.")
        try:
            parsed[key] = json.loads(value)
        except json.JSONDecodeError:
            parsed[key] = value
    return parsed


@contextmanager
def _repository(settings: Settings) -> Iterator[CatalogRepository]:
    repository = CatalogRepository(
        settings.catalog.db_path,
        busy_timeout_ms=settings.catalog.busy_timeout_ms,
    )
    repository.init_schema()
    try:
        yield repository
    finally:
        repository.close()
