from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

import allure
import pytest

from ux_processes.orchestrate import (
    INPUTS_FILENAME,
    JOURNAL_FILENAME,
    RESULT_FILENAME,
    new_run_id,
    orchestrate,
    run_process,
)
from ux_processes.processes import UnknownProcessError
from ux_processes.runtime import journal as events
from ux_processes.runtime.approval import RejectingApprover
from ux_processes.runtime.context import BreakpointRejected, EffectExecutionError
from ux_processes.runtime.journal import load_journal
from ux_processes.runtime.tasks import JobDescriptor

pytestmark = [
    allure.epic("Process Runtime"),
    allure.feature("Run Orchestration"),
]


class _ScriptedExecutor:
    def __init__(self, responses: Mapping[str, dict[str, Any]]) -> None:
        self.responses = responses
        self.task_names: list[str] = []

    def execute(
        self,
        descriptor: JobDescriptor,
        args: Mapping[str, Any],
        *,
        task_name: str,
        effect_id: str,
    ) -> dict[str, Any]:
        self.task_names.append(task_name)
        if task_name == "explode":
            raise EffectExecutionError(task_name, effect_id, "boom")
        return dict(self.responses.get(task_name, {}))


def test_run_process_persists_inputs_result_and_journal(echo_settings) -> None:
    executor = _ScriptedExecutor(
        {"research-planning": {"planApproved": False, "recommendations": ["narrow scope"]}},
    )

    outcome = run_process(
        "ux-ui-design/user-research",
        {"projectName": "Shop"},
        settings=echo_settings,
        executor=executor,
        run_id="run-a",
    )

    assert outcome.run_dir == echo_settings.runtime.workdir_root / "run-a"
    assert outcome.result["success"] is False
    assert json.loads((outcome.run_dir / INPUTS_FILENAME).read_text("utf-8")) == {
        "projectName": "Shop",
    }
    saved = json.loads(outcome.result_path.read_text("utf-8"))
    assert saved["reason"] == "Research plan quality insufficient"
    assert outcome.result_path.name == RESULT_FILENAME
    journal = load_journal(outcome.run_dir / JOURNAL_FILENAME)
    assert [event.type for event in journal] == [
        events.RUN_CREATED,
        events.PROCESS_LOG,
        events.PROCESS_LOG,
        events.EFFECT_REQUESTED,
        events.EFFECT_RESOLVED,
        events.PROCESS_LOG,
        events.RUN_COMPLETED,
    ]
    assert journal[5].data == {"level": "warn", "message": "Research plan needs refinement"}
    assert journal[-1].data == {"success": False, "artifacts": 0}


def test_run_process_end_to_end_with_echo_agent(echo_settings) -> None:
    outcome = run_process(
        "ux-ui-design/user-research",
        {"projectName": "Shop", "researchMethods": ["interviews"]},
        settings=echo_settings,
    )

    assert outcome.result["success"] is True
    assert outcome.result["qualityScore"] == 0
    assert outcome.result["qualityMet"] is False
    assert outcome.result["recommendations"] is None
    task_dirs = list((outcome.run_dir / "tasks").iterdir())
    assert task_dirs
    assert all((task_dir / "result.json").exists() for task_dir in task_dirs)


def test_rejected_breakpoint_marks_run_failed(echo_settings) -> None:
    executor = _ScriptedExecutor({"design-system-strategy": {"success": True}})

    with pytest.raises(BreakpointRejected):
        run_process(
            "specializations/ux-ui-design/component-library",
            {"projectName": "Shop"},
            settings=echo_settings,
            approver=RejectingApprover("wrong scope"),
            executor=executor,
            run_id="run-b",
        )

    run_dir = echo_settings.runtime.workdir_root / "run-b"
    assert not (run_dir / RESULT_FILENAME).exists()
    journal = load_journal(run_dir / JOURNAL_FILENAME)
    assert journal[-1].type == events.RUN_FAILED
    assert journal[-1].data["breakpoint"] == "Design System Strategy Review"
    assert journal[-1].data["feedback"] == "wrong scope"
    assert executor.task_names == ["design-system-strategy"]


def test_unknown_process_is_rejected_before_any_side_effect(echo_settings) -> None:
    with pytest.raises(UnknownProcessError, match="Unknown process: nope"):
        run_process("nope", {}, settings=echo_settings)

    assert not echo_settings.runtime.workdir_root.exists()


def test_journal_can_be_disabled(echo_settings) -> None:
    settings = replace(
        echo_settings,
        runtime=replace(echo_settings.runtime, write_journal=False),
    )

    outcome = run_process(
        "ux-ui-design/user-research",
        None,
        settings=settings,
        executor=_ScriptedExecutor({}),
        run_id="run-c",
    )

    assert outcome.result["success"] is False
    assert not (outcome.run_dir / JOURNAL_FILENAME).exists()
    assert (outcome.run_dir / INPUTS_FILENAME).exists()


def test_new_run_id_is_sortable_and_unique() -> None:
    first = new_run_id()
    second = new_run_id()

    assert first != second
    assert len(first) == len("20250101T000000Z-") + 8
    assert first[8] == "T"


def test_orchestrate_flow_runs_agent_tasks_as_prefect_tasks(
    echo_settings,
    prefect_harness,
) -> None:
    settings = replace(
        echo_settings,
        runtime=replace(echo_settings.runtime, use_prefect=True),
    )

    outcome = orchestrate(
        "specializations/ux-ui-design/accessibility-audit",
        {"projectName": "Shop", "scope": ["home", "checkout"]},
        settings=settings,
        run_id="run-flow",
    )

    assert outcome.run_id == "run-flow"
    assert outcome.result["success"] is True
    assert outcome.result["metadata"]["scope"] == 2
    journal = load_journal(outcome.run_dir / JOURNAL_FILENAME)
    requested = [event for event in journal if event.type == events.EFFECT_REQUESTED]
    resolved = [event for event in journal if event.type == events.EFFECT_RESOLVED]
    assert len(requested) == len(resolved) == 17
    assert not [event for event in journal if event.type == events.EFFECT_FAILED]
    assert journal[-1].type == events.RUN_COMPLETED
    task_dirs = sorted((outcome.run_dir / "tasks").iterdir())
    assert len(task_dirs) == 17
    assert all((task_dir / "result.json").exists() for task_dir in task_dirs)
