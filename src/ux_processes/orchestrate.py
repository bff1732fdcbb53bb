"""Run a registered process end to end on the local runtime.

``orchestrate`` wraps ``run_process`` in a Prefect ``@flow`` so every agent
effect shows up as a retried task run of that flow.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import uuid4

from prefect import flow

from ux_processes.config import Settings
from ux_processes.processes import get_process
from ux_processes.runtime import journal as events
from ux_processes.runtime.approval import build_approver
from ux_processes.runtime.context import Approver, BreakpointRejected, TaskExecutor
from ux_processes.runtime.contracts import write_json
from ux_processes.runtime.executor import AgentTaskExecutor
from ux_processes.runtime.journal import RunJournal
from ux_processes.runtime.local import LocalProcessContext, utc_now

logger = logging.getLogger(__name__)

INPUTS_FILENAME = "inputs.json"
RESULT_FILENAME = "result.json"
JOURNAL_FILENAME = "journal.jsonl"


@dataclass(slots=True)
class RunOutcome:
    run_id: str
    process_id: str
    run_dir: Path
    result: dict[str, Any]

    @property
    def result_path(self) -> Path:
        return self.run_dir / RESULT_FILENAME


def new_run_id() -> str:
    return f"{utc_now().strftime('%Y%m%dT%H%M%SZ')}-{uuid4().hex[:8]}"


def run_process(  # noqa: PLR0913
    process_id: str,
    inputs: Mapping[str, Any] | None,
    *,
    settings: Settings | None = None,
    approver: Approver | None = None,
    executor: TaskExecutor | None = None,
    run_id: str | None = None,
) -> RunOutcome:
    """Execute one process run and persist its inputs, journal and result."""

    entry = get_process(process_id)
    settings = settings or Settings.from_env()
    settings.validate()
    run_id = run_id or new_run_id()
    run_dir = settings.runtime.workdir_root / run_id
    run_dir.mkdir(parents=True, exist_ok=True)

    payload = dict(inputs or {})
    write_json(run_dir / INPUTS_FILENAME, payload)
    journal = RunJournal(
        run_dir / JOURNAL_FILENAME if settings.runtime.write_journal else None,
        clock=utc_now,
    )
    journal.append(events.RUN_CREATED, {"run_id": run_id, "process_id": process_id})

    ctx = LocalProcessContext(
        run_id=run_id,
        executor=executor
        or AgentTaskExecutor(
            run_dir=run_dir,
            run_id=run_id,
            settings=settings,
            use_prefect_tasks=settings.runtime.use_prefect,
        ),
        approver=approver or build_approver(settings.runtime.approval_mode),
        journal=journal,
        max_parallel=settings.runtime.max_parallel_tasks,
    )

    logger.info("Run %s started: process=%s dir=%s", run_id, process_id, run_dir)
    try:
        result = entry.func(payload, ctx)
    except BreakpointRejected as error:
        journal.append(
            events.RUN_FAILED,
            {"error": str(error), "breakpoint": error.title, "feedback": error.feedback},
        )
        logger.warning("Run %s stopped at breakpoint %r", run_id, error.title)
        raise
    except Exception as error:
        journal.append(events.RUN_FAILED, {"error": str(error), "type": type(error).__name__})
        logger.exception("Run %s failed", run_id)
        raise

    write_json(run_dir / RESULT_FILENAME, result)
    journal.append(
        events.RUN_COMPLETED,
        {"success": bool(result.get("success")), "artifacts": len(result.get("artifacts", []))},
    )
    logger.info("Run %s completed: success=%s", run_id, result.get("success"))
    return RunOutcome(run_id=run_id, process_id=process_id, run_dir=run_dir, result=result)


@flow(name="ux_process", validate_parameters=False)
def orchestrate(  # noqa: PLR0913
    process_id: str,
    inputs: Mapping[str, Any] | None,
    *,
    settings: Settings | None = None,
    approver: Approver | None = None,
    executor: TaskExecutor | None = None,
    run_id: str | None = None,
) -> RunOutcome:
    return run_process(
        process_id,
        inputs,
        settings=settings,
        approver=approver,
        executor=executor,
        run_id=run_id,
    )
