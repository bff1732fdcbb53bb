"""In-process runtime implementing the process context."""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from typing import Any, TypeVar
from uuid import uuid4

from ux_processes.runtime import journal as events
from ux_processes.runtime.context import (
    Approver,
    BreakpointRejected,
    BreakpointRequest,
    Decision,
    TaskExecutor,
    emit_process_log,
)
from ux_processes.runtime.journal import RunJournal
from ux_processes.runtime.tasks import PhaseResult, TaskDefinition, TaskInvocation

logger = logging.getLogger(__name__)

T = TypeVar("T")


def utc_now() -> datetime:
    """Current UTC timestamp."""

    return datetime.now(tz=UTC)


def new_effect_id() -> str:
    return uuid4().hex


class LocalProcessContext:
    """Runs tasks through an executor and breakpoints through an approver."""

    def __init__(  # noqa: PLR0913
        self,
        *,
        run_id: str,
        executor: TaskExecutor,
        approver: Approver,
        journal: RunJournal,
        clock: Callable[[], datetime] = utc_now,
        ids: Callable[[], str] = new_effect_id,
        max_parallel: int = 4,
    ) -> None:
        if max_parallel <= 0:
            raise ValueError("max_parallel must be > 0")
        self.run_id = run_id
        self.executor = executor
        self.approver = approver
        self.journal = journal
        self._clock = clock
        self._ids = ids
        self.max_parallel = max_parallel

    def task(self, definition: TaskDefinition, args: Mapping[str, Any]) -> PhaseResult:
        effect_id = self._ids()
        descriptor = definition.build(args, TaskInvocation(effect_id=effect_id, run_id=self.run_id))
        self.journal.append(
            events.EFFECT_REQUESTED,
            {
                "effect_id": effect_id,
                "task_name": definition.name,
                "title": descriptor.title,
                "agent": descriptor.agent.name,
            },
        )
        try:
            data = self.executor.execute(
                descriptor,
                args,
                task_name=definition.name,
                effect_id=effect_id,
            )
        except Exception as error:
            self.journal.append(
                events.EFFECT_FAILED,
                {"effect_id": effect_id, "task_name": definition.name, "error": str(error)},
            )
            raise
        self.journal.append(
            events.EFFECT_RESOLVED,
            {"effect_id": effect_id, "task_name": definition.name, "keys": sorted(data)},
        )
        return PhaseResult(task_name=definition.name, effect_id=effect_id, data=data)

    def parallel_all(self, thunks: Sequence[Callable[[], T]]) -> list[T]:
        if not thunks:
            return []
        workers = min(self.max_parallel, len(thunks))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ux-effect") as pool:
            futures = [
                pool.submit(contextvars.copy_context().run, thunk)
                for thunk in thunks
            ]
            return [future.result() for future in futures]

    def breakpoint(
        self,
        *,
        question: str,
        title: str,
        context: Mapping[str, Any] | None = None,
    ) -> Decision:
        request = BreakpointRequest(question=question, title=title, context=dict(context or {}))
        self.journal.append(events.BREAKPOINT_REQUESTED, request.to_dict())
        decision = self.approver.approve(request)
        self.journal.append(
            events.BREAKPOINT_RESOLVED,
            {"title": title, **decision.to_dict()},
        )
        if not decision.approved:
            logger.warning("Breakpoint %r rejected by %s", title, decision.decided_by)
            raise BreakpointRejected(title, decision.feedback)
        return decision

    def log(self, level: str, message: str) -> None:
        emit_process_log(self.run_id, level, message)
        self.journal.append(events.PROCESS_LOG, {"level": level, "message": message})

    def now(self) -> datetime:
        return self._clock()
