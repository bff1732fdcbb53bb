"""Build catalog entries from the process registry."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from ux_processes.catalog.docblock import category_for, parse_docblock
from ux_processes.processes.registry import ProcessEntry

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogEntry:
    """One indexed process."""

    process_id: str
    description: str
    category: str
    module: str
    inputs: str | None = None
    outputs: str | None = None
    tasks: list[str] = field(default_factory=list)
    indexed_at: datetime | None = None


def build_entries(processes: Iterable[ProcessEntry]) -> list[CatalogEntry]:
    """Catalog entries for every process whose docstring declares ``@process``."""

    entries: list[CatalogEntry] = []
    for process in processes:
        docblock = parse_docblock(process.docstring)
        if docblock is None:
            logger.warning("Process %s has no @process docstring; skipped", process.process_id)
            continue
        if docblock.process_id != process.process_id:
            logger.warning(
                "Docstring of %s declares %s; registry id wins",
                process.module,
                docblock.process_id,
            )
        entries.append(
            CatalogEntry(
                process_id=process.process_id,
                description=docblock.description,
                category=category_for(process.process_id),
                module=process.module,
                inputs=docblock.inputs,
                outputs=docblock.outputs,
                tasks=process.tasks.names(),
            ),
        )
    return entries
