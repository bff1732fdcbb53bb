from __future__ import annotations

from pathlib import Path

import allure
import pytest

from ux_processes.runtime.backend.cli_backend import BackendRunError, _build_run_args

pytestmark = [
    allure.epic("Process Runtime"),
    allure.feature("Agent Command Rendering"),
]


def test_build_run_args_windows_avoids_nested_quoting_in_quoted_payload() -> None:
    run_args, command_head = _build_run_args(
        command_template='codex exec --model {model} "task_manifest={task_manifest}\\n{prompt}"',
        model="gpt-5-codex",
        prompt='hello "world"',
        prompt_file=Path("input/prompt.txt"),
        manifest_path=Path("m file.json"),
        os_name="nt",
    )

    assert isinstance(run_args, str)
    assert command_head == "codex"
    assert "--model gpt-5-codex" in run_args
    assert run_args.startswith("codex exec")


def test_build_run_args_posix_quotes_each_placeholder_as_one_argument() -> None:
    run_args, command_head = _build_run_args(
        command_template="claude -p --model {model} {prompt}",
        model="sonnet",
        prompt="design a button; rm -rf /",
        prompt_file=Path("prompt.txt"),
        manifest_path=Path("task.json"),
        os_name="posix",
    )

    assert command_head == "claude"
    assert run_args == ["claude", "-p", "--model", "sonnet", "design a button; rm -rf /"]


def test_build_run_args_accepts_prompt_file_and_manifest_placeholders() -> None:
    run_args, _ = _build_run_args(
        command_template="runner --manifest {task_manifest} --prompt-file {prompt_file}",
        model="m",
        prompt="ignored",
        prompt_file=Path("/tmp/run dir/prompt.txt"),
        manifest_path=Path("/tmp/run dir/task.json"),
        os_name="posix",
    )

    assert run_args == [
        "runner",
        "--manifest",
        "/tmp/run dir/task.json",
        "--prompt-file",
        "/tmp/run dir/prompt.txt",
    ]


@pytest.mark.parametrize(
    ("template", "message"),
    [
        ("", "empty"),
        ("runner --model {model}", "must include"),
        ("runner {prompt} {unknown}", "Unsupported command template placeholder"),
    ],
)
def test_build_run_args_rejects_invalid_templates(template: str, message: str) -> None:
    with pytest.raises(BackendRunError, match=message) as error:
        _build_run_args(
            command_template=template,
            model="m",
            prompt="p",
            prompt_file=Path("prompt.txt"),
            manifest_path=Path("task.json"),
            os_name="posix",
        )

    assert error.value.transient is False
