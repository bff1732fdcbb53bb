"""Subprocess-based backend runner for CLI agents."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from pathlib import Path
from typing import IO, Any

from ux_processes.runtime.backend.base import BackendRunRequest, BackendRunResult
from ux_processes.runtime.contracts import EffectManifest, read_manifest

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124
_POLL_INTERVAL_SECONDS = 0.1
_TEMPLATE_FIELDS = ("model", "prompt", "prompt_file", "task_manifest")


class BackendRunError(RuntimeError):
    """Backend execution error with retryability hint."""

    def __init__(self, message: str, *, transient: bool) -> None:
        super().__init__(message)
        self.transient = transient

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild_backend_error, (str(self), self.transient))


def _rebuild_backend_error(message: str, transient: bool) -> BackendRunError:
    return BackendRunError(message, transient=transient)


class CliAgentBackend:
    """Execute one effect with the command template resolved by routing."""

    def run(self, request: BackendRunRequest) -> BackendRunResult:
        manifest = read_manifest(request.manifest_path)
        stdout_path = Path(manifest.output_stdout_path)
        stderr_path = Path(manifest.output_stderr_path)
        stdout_path.parent.mkdir(parents=True, exist_ok=True)

        base_prompt = Path(manifest.prompt_path).read_text("utf-8")
        enriched_prompt = _build_enriched_prompt(
            base_prompt=base_prompt,
            manifest=manifest,
            manifest_path=request.manifest_path,
        )
        prompt_file = Path(manifest.workdir) / "agent_prompt.txt"
        prompt_file.write_text(enriched_prompt, "utf-8")

        run_args, command_head = _build_run_args(
            command_template=request.command_template,
            model=request.model,
            prompt=enriched_prompt,
            prompt_file=prompt_file,
            manifest_path=request.manifest_path,
        )

        env = os.environ.copy()
        env["UX_PROCESSES_AGENT"] = request.agent
        env["UX_PROCESSES_MODEL"] = request.model
        env["UX_PROCESSES_MODEL_PROFILE"] = request.profile
        env["UX_PROCESSES_TASK_MANIFEST"] = str(request.manifest_path)

        logger.debug(
            "Starting %s for effect %s (%s)",
            command_head,
            manifest.effect_id,
            manifest.task_name,
        )
        try:
            with (
                stdout_path.open("w", encoding="utf-8") as stdout_handle,
                stderr_path.open("w", encoding="utf-8") as stderr_handle,
            ):
                return _run_subprocess(
                    run_args=run_args,
                    env=env,
                    cwd=Path(manifest.workdir),
                    timeout_seconds=request.timeout_seconds,
                    stdout_handle=stdout_handle,
                    stderr_handle=stderr_handle,
                    stdout_path=stdout_path,
                    stderr_path=stderr_path,
                )
        except FileNotFoundError as error:
            raise BackendRunError(
                f"CLI backend command not found: {command_head}",
                transient=False,
            ) from error
        except OSError as error:
            raise BackendRunError(
                f"CLI backend failed to start: {error}",
                transient=True,
            ) from error


def _build_enriched_prompt(
    *,
    base_prompt: str,
    manifest: EffectManifest,
    manifest_path: Path,
) -> str:
    """Append the manifest location and output path to the task prompt."""

    return (
        f"{base_prompt}\n"
        f"Your task manifest is at: {manifest_path}\n"
        f"Task input (descriptor and arguments): {manifest.task_input_path}\n"
        f"Write the result JSON object to: {manifest.output_result_path}\n"
    )


def _build_run_args(  # noqa: PLR0913
    *,
    command_template: str,
    model: str,
    prompt: str,
    prompt_file: Path,
    manifest_path: Path,
    os_name: str | None = None,
) -> tuple[str | list[str], str]:
    stripped = command_template.strip()
    if not stripped:
        raise BackendRunError("CLI backend command template is empty.", transient=False)
    if "{prompt}" not in stripped and "{prompt_file}" not in stripped:
        raise BackendRunError(
            "CLI backend command template must include {prompt} or {prompt_file}.",
            transient=False,
        )

    values = {
        "model": model,
        "prompt": prompt,
        "prompt_file": str(prompt_file),
        "task_manifest": str(manifest_path),
    }
    windows = (os_name or os.name) == "nt"
    quote = _quote_windows if windows else shlex.quote
    try:
        rendered = stripped.format(**{key: quote(values[key]) for key in _TEMPLATE_FIELDS})
    except (KeyError, IndexError) as error:
        raise BackendRunError(
            f"Unsupported command template placeholder: {error}",
            transient=False,
        ) from error

    if windows:
        command_head = rendered.split(maxsplit=1)[0] if rendered.strip() else ""
        if not command_head:
            raise BackendRunError(
                "CLI backend command template rendered empty command.",
                transient=False,
            )
        return rendered, command_head

    argv = shlex.split(rendered)
    if not argv:
        raise BackendRunError(
            "CLI backend command template rendered empty command.",
            transient=False,
        )
    return argv, argv[0]


def _quote_windows(value: str) -> str:
    return subprocess.list2cmdline([value])


def _run_subprocess(  # noqa: PLR0913
    *,
    run_args: str | list[str],
    env: dict[str, str],
    cwd: Path,
    timeout_seconds: int,
    stdout_handle: IO[str],
    stderr_handle: IO[str],
    stdout_path: Path,
    stderr_path: Path,
) -> BackendRunResult:
    process = subprocess.Popen(  # noqa: S603
        run_args,
        env=env,
        cwd=cwd,
        stdout=stdout_handle,
        stderr=stderr_handle,
        text=True,
    )
    start_monotonic = time.monotonic()

    while True:
        returncode = process.poll()
        elapsed = time.monotonic() - start_monotonic
        if returncode is not None:
            return BackendRunResult(
                exit_code=returncode,
                timed_out=False,
                stdout_path=stdout_path,
                stderr_path=stderr_path,
                elapsed_seconds=elapsed,
            )
        if elapsed >= timeout_seconds:
            _terminate_process(process)
            return BackendRunResult(
                exit_code=TIMEOUT_EXIT_CODE,
                timed_out=True,
                stdout_path=stdout_path,
                stderr_path=stderr_path,
                elapsed_seconds=elapsed,
            )
        time.sleep(_POLL_INTERVAL_SECONDS)


def _terminate_process(process: subprocess.Popen[str]) -> None:
    try:
        process.terminate()
    except OSError:
        return
    try:
        process.wait(timeout=2)
    except subprocess.TimeoutExpired:
        try:
            process.kill()
        except OSError:
            return
        process.wait(timeout=2)
