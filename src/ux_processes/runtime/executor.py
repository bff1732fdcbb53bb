"""Agent task execution over on-disk effect contracts.

Each effect is materialized under ``<run_dir>/tasks/<effect_id>/`` and executed
by a CLI agent inside a Prefect task, so transient agent failures are retried
with the configured policy.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from prefect import task

from ux_processes.config import Settings
from ux_processes.runtime.backend.base import AgentBackend, BackendRunRequest
from ux_processes.runtime.backend.cli_backend import BackendRunError, CliAgentBackend
from ux_processes.runtime.context import EffectExecutionError
from ux_processes.runtime.contracts import read_effect_result, read_manifest
from ux_processes.runtime.routing import FrozenRouting, RoutingDefaults, resolve_routing
from ux_processes.runtime.tasks import JobDescriptor
from ux_processes.runtime.workdir import EffectWorkdirManager

logger = logging.getLogger(__name__)

_DEFAULT_RETRIES = 2
_DEFAULT_RETRY_DELAY = 10
_STDERR_TAIL_CHARS = 400


def _is_retryable(task, task_run, state) -> bool:  # noqa: ANN001, ARG001
    try:
        state.result()
    except BackendRunError as error:
        return error.transient
    except Exception:  # noqa: BLE001
        return True
    return True


@task(
    retries=_DEFAULT_RETRIES,
    retry_delay_seconds=_DEFAULT_RETRY_DELAY,
    retry_condition_fn=_is_retryable,
)
def run_agent_effect(  # noqa: PLR0913
    *,
    task_name: str,
    effect_id: str,
    manifest_path: Path,
    routing: FrozenRouting,
    timeout_seconds: int,
    backend: AgentBackend | None = None,
) -> dict[str, Any]:
    """Run one materialized effect through the CLI agent and return its result object."""

    request = BackendRunRequest(
        manifest_path=manifest_path,
        timeout_seconds=timeout_seconds,
        agent=routing.agent,
        profile=routing.profile,
        model=routing.model,
        command_template=routing.command_template,
    )
    result = (backend or CliAgentBackend()).run(request)

    if result.timed_out:
        logger.warning("[%s] effect %s timed out after %ss", task_name, effect_id, timeout_seconds)
        raise EffectExecutionError(task_name, effect_id, f"agent timed out after {timeout_seconds}s")
    if result.exit_code != 0:
        stderr_tail = _read_tail(result.stderr_path)
        logger.warning(
            "[%s] effect %s failed with exit code %s",
            task_name,
            effect_id,
            result.exit_code,
        )
        reason = f"agent exit code {result.exit_code}"
        if stderr_tail:
            reason = f"{reason}: {stderr_tail}"
        raise EffectExecutionError(task_name, effect_id, reason)

    output_path = Path(read_manifest(manifest_path).output_result_path)
    if not output_path.exists():
        raise EffectExecutionError(task_name, effect_id, f"result file missing: {output_path}")
    try:
        payload = read_effect_result(output_path)
    except (TypeError, json.JSONDecodeError) as error:
        raise EffectExecutionError(task_name, effect_id, f"invalid result JSON: {error}") from error

    logger.info("[%s] effect %s completed in %.1fs", task_name, effect_id, result.elapsed_seconds)
    return payload


class AgentTaskExecutor:
    """Task executor that runs every effect through a CLI agent."""

    def __init__(  # noqa: PLR0913
        self,
        *,
        run_dir: Path,
        run_id: str,
        settings: Settings,
        agent_override: str | None = None,
        backend: AgentBackend | None = None,
        use_prefect_tasks: bool = True,
    ) -> None:
        self.run_id = run_id
        self.settings = settings
        self.agent_override = agent_override
        self.backend = backend
        self.use_prefect_tasks = use_prefect_tasks
        self._workdir = EffectWorkdirManager(run_dir)
        self._routing_defaults = RoutingDefaults.from_settings(settings.agents)

    def execute(
        self,
        descriptor: JobDescriptor,
        args: Mapping[str, Any],
        *,
        task_name: str,
        effect_id: str,
    ) -> dict[str, Any]:
        routing = resolve_routing(
            defaults=self._routing_defaults,
            task_name=task_name,
            agent_override=self.agent_override,
        )
        materialized = self._workdir.materialize(
            run_id=self.run_id,
            effect_id=effect_id,
            task_name=task_name,
            descriptor=descriptor,
            args=dict(args),
            metadata={"routing": routing.to_metadata()},
        )
        call_kwargs: dict[str, Any] = {
            "task_name": task_name,
            "effect_id": effect_id,
            "manifest_path": materialized.manifest_path,
            "routing": routing,
            "timeout_seconds": self.settings.runtime.task_timeout_seconds,
            "backend": self.backend,
        }
        runner = run_agent_effect.fn
        if self.use_prefect_tasks:
            runner = run_agent_effect.with_options(
                name=f"effect:{task_name}",
                retries=self.settings.runtime.task_retries,
                retry_delay_seconds=self.settings.runtime.task_retry_delay_seconds,
            )
        try:
            return runner(**call_kwargs)
        except BackendRunError as error:
            logger.warning(
                "[%s] effect %s could not start the agent: %s",
                task_name,
                effect_id,
                error,
            )
            raise EffectExecutionError(task_name, effect_id, str(error)) from error


def _read_tail(path: Path) -> str:
    if not path.exists():
        return ""
    text = path.read_text("utf-8", errors="replace").strip()
    return text[-_STDERR_TAIL_CHARS:]
