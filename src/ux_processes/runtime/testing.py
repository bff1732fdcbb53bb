"""Deterministic harness for exercising processes without a live agent.

``ScriptedProcessContext`` answers every task from canned responses, records
calls, breakpoints and log lines, and runs fan-outs sequentially, so two runs
with the same script produce identical results.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

from ux_processes.runtime.approval import AutoApprover
from ux_processes.runtime.context import (
    Approver,
    BreakpointRejected,
    BreakpointRequest,
    Decision,
    emit_process_log,
)
from ux_processes.runtime.tasks import JobDescriptor, PhaseResult, TaskDefinition, TaskInvocation

T = TypeVar("T")

CROCKFORD_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
ULID_LENGTH = 26
DEFAULT_START = datetime(2025, 1, 1, tzinfo=UTC)

ScriptedResponse = (
    Mapping[str, Any]
    | Sequence[Mapping[str, Any]]
    | Callable[[Mapping[str, Any]], Mapping[str, Any]]
)


class FixedClock:
    """Clock advancing by a fixed step on every read."""

    def __init__(self, start: datetime = DEFAULT_START, step_ms: int = 1_000) -> None:
        if start.tzinfo is None:
            start = start.replace(tzinfo=UTC)
        self._current = start
        self._step = timedelta(milliseconds=step_ms)

    def __call__(self) -> datetime:
        value = self._current
        self._current = value + self._step
        return value


class DeterministicIds:
    """Sequential ULID-shaped identifiers."""

    def __init__(self, prefix: str = "01", start: int = 0) -> None:
        if len(prefix) >= ULID_LENGTH:
            raise ValueError("prefix leaves no room for the sequence")
        self.prefix = prefix
        self._next = start

    def __call__(self) -> str:
        value = self._next
        self._next += 1
        return self.prefix + _crockford(value, ULID_LENGTH - len(self.prefix))


@dataclass(slots=True)
class TaskCall:
    """One recorded task invocation."""

    task_name: str
    args: dict[str, Any]
    effect_id: str
    descriptor: JobDescriptor


@dataclass(slots=True)
class ProcessLogLine:
    level: str
    message: str


@dataclass(slots=True)
class ScriptedProcessContext:
    """Process context answering tasks from canned responses."""

    responses: Mapping[str, ScriptedResponse] = field(default_factory=dict)
    approver: Approver = field(default_factory=AutoApprover)
    clock: Callable[[], datetime] = field(default_factory=FixedClock)
    ids: Callable[[], str] = field(default_factory=DeterministicIds)
    run_id: str = "run-deterministic"
    calls: list[TaskCall] = field(default_factory=list)
    breakpoints: list[BreakpointRequest] = field(default_factory=list)
    decisions: list[Decision] = field(default_factory=list)
    logs: list[ProcessLogLine] = field(default_factory=list)
    _consumed: dict[str, int] = field(default_factory=dict)

    def task(self, definition: TaskDefinition, args: Mapping[str, Any]) -> PhaseResult:
        effect_id = self.ids()
        descriptor = definition.build(args, TaskInvocation(effect_id=effect_id, run_id=self.run_id))
        self.calls.append(
            TaskCall(
                task_name=definition.name,
                args=dict(args),
                effect_id=effect_id,
                descriptor=descriptor,
            ),
        )
        return PhaseResult(
            task_name=definition.name,
            effect_id=effect_id,
            data=self._respond(definition.name, args),
        )

    def parallel_all(self, thunks: Sequence[Callable[[], T]]) -> list[T]:
        return [thunk() for thunk in thunks]

    def breakpoint(
        self,
        *,
        question: str,
        title: str,
        context: Mapping[str, Any] | None = None,
    ) -> Decision:
        request = BreakpointRequest(question=question, title=title, context=dict(context or {}))
        self.breakpoints.append(request)
        decision = self.approver.approve(request)
        self.decisions.append(decision)
        if not decision.approved:
            raise BreakpointRejected(title, decision.feedback)
        return decision

    def log(self, level: str, message: str) -> None:
        emit_process_log(self.run_id, level, message)
        self.logs.append(ProcessLogLine(level=level, message=message))

    def now(self) -> datetime:
        return self.clock()

    def calls_for(self, task_name: str) -> list[TaskCall]:
        return [call for call in self.calls if call.task_name == task_name]

    def task_names(self) -> list[str]:
        return [call.task_name for call in self.calls]

    def breakpoint_titles(self) -> list[str]:
        return [request.title for request in self.breakpoints]

    def _respond(self, task_name: str, args: Mapping[str, Any]) -> dict[str, Any]:
        scripted = self.responses.get(task_name)
        if scripted is None:
            return {}
        if callable(scripted):
            return dict(scripted(args))
        if isinstance(scripted, Mapping):
            return dict(scripted)
        if not scripted:
            return {}
        index = self._consumed.get(task_name, 0)
        self._consumed[task_name] = index + 1
        return dict(scripted[min(index, len(scripted) - 1)])


def _crockford(value: int, width: int) -> str:
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 32)
        digits.append(CROCKFORD_ALPHABET[remainder])
    encoded = "".join(reversed(digits)) or "0"
    if len(encoded) > width:
        raise ValueError("sequence exhausted the identifier width")
    return encoded.rjust(width, "0")
