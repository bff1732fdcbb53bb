"""Interfaces a process is written against.

Task execution and human approval are separate seams: a runtime combines a
:class:`TaskExecutor` with an :class:`Approver`, and tests can replace either
with a deterministic fake.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, TypeVar, runtime_checkable

from ux_processes.runtime.tasks import JobDescriptor, PhaseResult, TaskDefinition

T = TypeVar("T")

process_logger = logging.getLogger("ux_processes.process")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class BreakpointRejected(RuntimeError):
    """Human reviewer declined to continue past a breakpoint."""

    def __init__(self, title: str, feedback: str | None = None) -> None:
        message = f"Breakpoint rejected: {title}"
        if feedback:
            message = f"{message} ({feedback})"
        super().__init__(message)
        self.title = title
        self.feedback = feedback


class EffectExecutionError(RuntimeError):
    """One agent task could not produce a usable result."""

    def __init__(self, task_name: str, effect_id: str, reason: str) -> None:
        super().__init__(f"Task {task_name!r} (effect {effect_id}) failed: {reason}")
        self.task_name = task_name
        self.effect_id = effect_id
        self.reason = reason

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self.task_name, self.effect_id, self.reason))


@dataclass(slots=True)
class BreakpointRequest:
    """Question surfaced to a human reviewer."""

    question: str
    title: str
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"question": self.question, "title": self.title, "context": self.context}


@dataclass(slots=True)
class Decision:
    """Reviewer verdict for one breakpoint."""

    approved: bool
    feedback: str | None = None
    decided_by: str = "unknown"

    def to_dict(self) -> dict[str, Any]:
        return {"approved": self.approved, "feedback": self.feedback, "decided_by": self.decided_by}


@runtime_checkable
class Approver(Protocol):
    """Resolves breakpoints."""

    def approve(self, request: BreakpointRequest) -> Decision:
        """Return the reviewer decision for ``request``."""


@runtime_checkable
class TaskExecutor(Protocol):
    """Runs one agent job and returns its JSON result."""

    def execute(
        self,
        descriptor: JobDescriptor,
        args: Mapping[str, Any],
        *,
        task_name: str,
        effect_id: str,
    ) -> dict[str, Any]:
        """Execute ``descriptor`` and return the agent result object."""


@runtime_checkable
class ProcessContext(Protocol):
    """Capabilities available to a running process."""

    run_id: str

    def task(self, definition: TaskDefinition, args: Mapping[str, Any]) -> PhaseResult:
        """Run one task and return its phase record."""

    def parallel_all(self, thunks: Sequence[Callable[[], T]]) -> list[T]:
        """Run independent calls and return their results in input order."""

    def breakpoint(
        self,
        *,
        question: str,
        title: str,
        context: Mapping[str, Any] | None = None,
    ) -> Decision:
        """Pause for human approval."""

    def log(self, level: str, message: str) -> None:
        """Write one process log line."""

    def now(self) -> datetime:
        """Current timezone-aware time as seen by the runtime."""


def resolve_log_level(level: str) -> int:
    """Map a process log level name onto a stdlib logging level."""

    return _LOG_LEVELS.get(level.strip().lower(), logging.INFO)


def emit_process_log(run_id: str, level: str, message: str) -> None:
    process_logger.log(resolve_log_level(level), "[%s] %s", run_id, message)
