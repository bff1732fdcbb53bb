"""Registry of the processes shipped with the package."""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from ux_processes.processes import (
    accessibility_audit,
    component_library,
    persona_development,
    user_research,
    ux_writing,
)
from ux_processes.runtime.context import ProcessContext
from ux_processes.runtime.tasks import TaskRegistry

ProcessFunc = Callable[[Mapping[str, Any], ProcessContext], dict[str, Any]]


class UnknownProcessError(KeyError):
    """No process is registered under the requested id."""

    def __init__(self, process_id: str) -> None:
        super().__init__(process_id)
        self.process_id = process_id

    def __str__(self) -> str:
        return f"Unknown process: {self.process_id}"


@dataclass(frozen=True, slots=True)
class ProcessEntry:
    process_id: str
    func: ProcessFunc
    module: str
    tasks: TaskRegistry

    @property
    def docstring(self) -> str:
        return sys.modules[self.module].__doc__ or ""


def _entry(module: ModuleType) -> ProcessEntry:
    return ProcessEntry(
        process_id=module.PROCESS_ID,
        func=module.process,
        module=module.__name__,
        tasks=module.TASKS,
    )


PROCESSES: dict[str, ProcessEntry] = {
    entry.process_id: entry
    for entry in (
        _entry(accessibility_audit),
        _entry(persona_development),
        _entry(ux_writing),
        _entry(user_research),
        _entry(component_library),
    )
}


def get_process(process_id: str) -> ProcessEntry:
    try:
        return PROCESSES[process_id]
    except KeyError:
        raise UnknownProcessError(process_id) from None


def list_processes() -> list[ProcessEntry]:
    """Registered processes sorted by id."""

    return [PROCESSES[process_id] for process_id in sorted(PROCESSES)]
