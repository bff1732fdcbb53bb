from __future__ import annotations

import threading
import time
from collections.abc import Mapping
from functools import partial
from typing import Any

import allure
import pytest

from ux_processes.runtime import journal as events
from ux_processes.runtime.approval import AutoApprover, RejectingApprover, build_approver
from ux_processes.runtime.context import BreakpointRejected, EffectExecutionError
from ux_processes.runtime.journal import RunJournal, load_journal
from ux_processes.runtime.local import LocalProcessContext
from ux_processes.runtime.tasks import JobDescriptor, TaskRegistry
from ux_processes.runtime.testing import DeterministicIds, FixedClock

pytestmark = [
    allure.epic("Process Runtime"),
    allure.feature("Local Runtime"),
]

TASKS = TaskRegistry("tests/local")
echo_task = TASKS.agent_task(
    "echo",
    title=lambda args: f"Echo {args.get('value')}",
    agent="general-purpose",
    role="Echo",
    task="Echo the value",
    instructions=[],
    outputs={"value": "string"},
    labels=["test"],
)


class _RecordingExecutor:
    def __init__(self, delays: Mapping[str, float] | None = None) -> None:
        self.delays = dict(delays or {})
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def execute(
        self,
        descriptor: JobDescriptor,
        args: Mapping[str, Any],
        *,
        task_name: str,
        effect_id: str,
    ) -> dict[str, Any]:
        value = str(args["value"])
        time.sleep(self.delays.get(value, 0))
        with self._lock:
            self.calls.append(value)
        if value == "boom":
            raise EffectExecutionError(task_name, effect_id, "agent exit code 1")
        return {"value": value, "title": descriptor.title}


def _context(tmp_path, executor, approver=None) -> LocalProcessContext:
    return LocalProcessContext(
        run_id="run-1",
        executor=executor,
        approver=approver or AutoApprover(),
        journal=RunJournal(tmp_path / "journal.jsonl", clock=FixedClock()),
        ids=DeterministicIds(),
        max_parallel=3,
    )


def test_parallel_all_returns_results_in_input_order(tmp_path) -> None:
    executor = _RecordingExecutor(delays={"a": 0.2, "b": 0.1})
    ctx = _context(tmp_path, executor)

    results = ctx.parallel_all(
        [partial(ctx.task, echo_task, {"value": value}) for value in ("a", "b", "c")],
    )

    assert [result.get("value") for result in results] == ["a", "b", "c"]
    assert [result.get("title") for result in results] == ["Echo a", "Echo b", "Echo c"]
    assert sorted(executor.calls) == ["a", "b", "c"]
    assert len({result.effect_id for result in results}) == 3
    assert ctx.parallel_all([]) == []


def test_task_failure_is_journaled_and_propagates(tmp_path) -> None:
    ctx = _context(tmp_path, _RecordingExecutor())

    with pytest.raises(EffectExecutionError, match="agent exit code 1"):
        ctx.task(echo_task, {"value": "boom"})

    types = [event.type for event in load_journal(tmp_path / "journal.jsonl")]
    assert types == [events.EFFECT_REQUESTED, events.EFFECT_FAILED]


def test_rejected_breakpoint_raises_and_is_journaled(tmp_path) -> None:
    ctx = _context(tmp_path, _RecordingExecutor(), approver=RejectingApprover("too early"))

    with pytest.raises(BreakpointRejected) as error:
        ctx.breakpoint(question="Continue?", title="Gate", context={"summary": {"n": 1}})

    assert error.value.title == "Gate"
    assert error.value.feedback == "too early"
    journal = load_journal(tmp_path / "journal.jsonl")
    assert [event.type for event in journal] == [
        events.BREAKPOINT_REQUESTED,
        events.BREAKPOINT_RESOLVED,
    ]
    assert journal[0].data["context"] == {"summary": {"n": 1}}
    assert journal[1].data["approved"] is False
    assert journal[1].data["decided_by"] == "reject"


def test_journal_records_tasks_logs_and_sequence(tmp_path) -> None:
    ctx = _context(tmp_path, _RecordingExecutor())

    result = ctx.task(echo_task, {"value": "x"})
    ctx.log("warn", "careful")
    decision = ctx.breakpoint(question="Continue?", title="Gate")

    assert result.task_name == "echo"
    assert result.effect_id == "01" + "0" * 24
    assert decision.approved is True
    journal = load_journal(tmp_path / "journal.jsonl")
    assert [event.seq for event in journal] == [1, 2, 3, 4, 5]
    assert journal[1].data == {
        "effect_id": result.effect_id,
        "task_name": "echo",
        "keys": ["title", "value"],
    }
    assert journal[2].type == events.PROCESS_LOG
    assert journal[2].data == {"level": "warn", "message": "careful"}
    assert journal[0].recorded_at == "2025-01-01T00:00:00+00:00"


def test_in_memory_journal_keeps_events(tmp_path) -> None:
    journal = RunJournal(None, clock=FixedClock())

    journal.append(events.RUN_CREATED, {"run_id": "r"})

    assert [event.type for event in journal.events()] == [events.RUN_CREATED]
    assert list(tmp_path.iterdir()) == []


def test_max_parallel_must_be_positive(tmp_path) -> None:
    with pytest.raises(ValueError, match="max_parallel"):
        LocalProcessContext(
            run_id="r",
            executor=_RecordingExecutor(),
            approver=AutoApprover(),
            journal=RunJournal(None, clock=FixedClock()),
            max_parallel=0,
        )


def test_build_approver_rejects_unknown_mode() -> None:
    assert isinstance(build_approver("AUTO"), AutoApprover)
    assert isinstance(build_approver("reject"), RejectingApprover)
    with pytest.raises(ValueError, match="Unsupported approval mode"):
        build_approver("maybe")
