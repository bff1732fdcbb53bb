from __future__ import annotations

from datetime import UTC, datetime

import allure
import pytest

from ux_processes.processes import user_research
from ux_processes.runtime.approval import RejectingApprover
from ux_processes.runtime.context import BreakpointRejected
from ux_processes.runtime.tasks import TaskRegistry
from ux_processes.runtime.testing import (
    CROCKFORD_ALPHABET,
    DeterministicIds,
    FixedClock,
    ScriptedProcessContext,
)

pytestmark = [
    allure.epic("Process Runtime"),
    allure.feature("Deterministic Harness"),
]


def _answer_task():
    registry = TaskRegistry("tests/answers")
    return registry.agent_task(
        "answer",
        title="Answer",
        agent="general-purpose",
        role="Tester",
        task="Answer the question",
        instructions=["Reply"],
        outputs={"value": "number"},
        labels=["agent", "answer"],
    )


def test_fixed_clock_advances_by_step() -> None:
    clock = FixedClock(datetime(2025, 6, 1, 9, 30), step_ms=250)

    first = clock()
    second = clock()

    assert first == datetime(2025, 6, 1, 9, 30, tzinfo=UTC)
    assert (second - first).total_seconds() == 0.25


def test_deterministic_ids_are_ulid_shaped_and_sequential() -> None:
    ids = DeterministicIds()

    values = [ids() for _ in range(33)]

    assert values[0] == "01" + "0" * 24
    assert values[1].endswith("01")
    assert values[31].endswith("0Z")
    assert values[32].endswith("10")
    assert all(len(value) == 26 for value in values)
    assert all(set(value) <= set(CROCKFORD_ALPHABET) for value in values)
    assert values == sorted(values)
    assert DeterministicIds(prefix="7Z")().startswith("7Z")


def test_deterministic_ids_reject_oversized_prefix() -> None:
    with pytest.raises(ValueError, match="prefix"):
        DeterministicIds(prefix="0" * 26)


def test_sequence_responses_repeat_last_entry() -> None:
    answer = _answer_task()
    ctx = ScriptedProcessContext(responses={"answer": [{"value": 1}, {"value": 2}]})

    values = [ctx.task(answer, {}).number("value") for _ in range(3)]

    assert values == [1, 2, 2]
    assert [call.effect_id for call in ctx.calls_for("answer")] == [
        "01" + "0" * 24,
        "01" + "0" * 23 + "1",
        "01" + "0" * 23 + "2",
    ]


def test_callable_and_missing_responses() -> None:
    answer = _answer_task()
    ctx = ScriptedProcessContext(responses={"answer": lambda args: {"value": args["n"] * 2}})

    doubled = ctx.task(answer, {"n": 21})
    empty = ScriptedProcessContext().task(answer, {"n": 1})

    assert doubled.number("value") == 42
    assert doubled.task_name == "answer"
    assert ctx.calls[0].args == {"n": 21}
    assert ctx.calls[0].descriptor.agent.prompt.context == {"n": 21}
    assert empty.to_dict() == {}
    assert empty.number("value") == 0


def test_identical_scripts_produce_identical_results() -> None:
    responses = {
        "research-planning": {"planApproved": True, "selectedMethods": ["interviews"]},
        "data-synthesis": {"themes": ["a", "b"], "patterns": ["p"]},
        "research-quality-scoring": {"overallScore": 91},
    }
    inputs = {"projectName": "Shop", "researchMethods": ["interviews"]}

    first_ctx = ScriptedProcessContext(responses=responses)
    second_ctx = ScriptedProcessContext(responses=responses)
    first = user_research.process(inputs, first_ctx)
    second = user_research.process(inputs, second_ctx)

    assert first == second
    assert first_ctx.task_names() == second_ctx.task_names()
    assert [call.effect_id for call in first_ctx.calls] == [
        call.effect_id for call in second_ctx.calls
    ]
    assert first["qualityScore"] == 91
    assert first["duration"] == 1000


def test_rejecting_approver_stops_at_first_breakpoint() -> None:
    ctx = ScriptedProcessContext(
        responses={"research-planning": {"planApproved": True}},
        approver=RejectingApprover("not now"),
    )

    with pytest.raises(BreakpointRejected, match="not now") as error:
        user_research.process({"projectName": "Shop"}, ctx)

    assert error.value.title == ctx.breakpoint_titles()[0]
    assert ctx.decisions[0].approved is False
    assert ctx.decisions[0].decided_by == "reject"
    assert len(ctx.breakpoints) == 1
