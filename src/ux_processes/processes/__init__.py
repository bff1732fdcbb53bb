"""UX/UI design processes and their registry."""

from ux_processes.processes.registry import (
    PROCESSES,
    ProcessEntry,
    UnknownProcessError,
    get_process,
    list_processes,
)

__all__ = [
    "PROCESSES",
    "ProcessEntry",
    "UnknownProcessError",
    "get_process",
    "list_processes",
]
