from __future__ import annotations

import json
import re
from pathlib import Path

import allure
from click.testing import CliRunner

from ux_processes import __version__
from ux_processes.main import ux_processes

pytestmark = [
    allure.epic("CLI"),
    allure.feature("Process and Catalog Commands"),
]


def _saved_result(output: str) -> dict:
    match = re.search(r"^Result saved: (.+)$", output, re.MULTILINE)
    assert match is not None, output
    return json.loads(Path(match.group(1)).read_text("utf-8"))


def test_version_and_list(isolated_env) -> None:
    runner = CliRunner()

    version = runner.invoke(ux_processes, ["--version"])
    listing = runner.invoke(ux_processes, ["process", "list", "--descriptions"])

    assert version.exit_code == 0
    assert __version__ in version.output
    assert listing.exit_code == 0, listing.output
    assert "Processes: 5" in listing.output
    assert "- ux-ui-design/ux-writing" in listing.output
    assert "UX Writing and Microcopy Guidelines" in listing.output


def test_show_prints_metadata_and_tasks(isolated_env) -> None:
    runner = CliRunner()

    result = runner.invoke(ux_processes, ["process", "show", "ux-ui-design/user-research"])
    missing = runner.invoke(ux_processes, ["process", "show", "nope"])

    assert result.exit_code == 0, result.output
    assert "Process: ux-ui-design/user-research" in result.output
    assert "Tasks: 12" in result.output
    assert "- research-quality-scoring" in result.output
    assert "Inputs: { projectName: string" in result.output
    assert missing.exit_code == 1
    assert "Unknown process: nope" in missing.output


def test_run_with_echo_agent_writes_result(isolated_env, echo_agent) -> None:
    inputs_path = isolated_env / "inputs.json"
    inputs_path.write_text(json.dumps({"projectName": "Shop", "productType": "mobile"}), "utf-8")

    result = CliRunner().invoke(
        ux_processes,
        [
            "process",
            "run",
            "ux-ui-design/ux-writing",
            "--inputs",
            str(inputs_path),
            "--set",
            "projectName=Checkout",
            "--set",
            "targetQualityScore=0",
            "--approval",
            "auto",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Success: yes" in result.output
    saved = _saved_result(result.output)
    assert saved["projectName"] == "Checkout"
    assert saved["productType"] == "mobile"
    assert saved["qualityMet"] is True
    assert saved["contentAuditReport"] is None
    assert str(isolated_env / "runs") in result.output


def test_run_rejected_breakpoint_exits_non_zero(isolated_env, echo_agent) -> None:
    result = CliRunner().invoke(
        ux_processes,
        ["process", "run", "ux-ui-design/ux-writing", "--approval", "reject"],
    )

    assert result.exit_code == 1
    assert "Run stopped: Breakpoint rejected: Voice and Tone Review" in result.output


def test_run_reports_input_errors(isolated_env, echo_agent) -> None:
    runner = CliRunner()
    bad_inputs = isolated_env / "bad.json"
    bad_inputs.write_text("[1, 2]", "utf-8")

    not_object = runner.invoke(
        ux_processes,
        ["process", "run", "ux-ui-design/ux-writing", "--inputs", str(bad_inputs)],
    )
    bad_override = runner.invoke(
        ux_processes,
        ["process", "run", "ux-ui-design/ux-writing", "--set", "projectName"],
    )
    unknown = runner.invoke(ux_processes, ["process", "run", "nope"])

    assert not_object.exit_code == 1
    assert "Inputs file" in not_object.output
    assert bad_override.exit_code == 1
    assert "Invalid --set value" in bad_override.output
    assert unknown.exit_code == 1
    assert "Unknown process: nope" in unknown.output


def test_catalog_index_and_search(isolated_env) -> None:
    runner = CliRunner()
    db_path = isolated_env / "cli-catalog.db"

    empty = runner.invoke(ux_processes, ["catalog", "search", "persona", "--db-path", str(db_path)])
    indexed = runner.invoke(ux_processes, ["catalog", "index", "--db-path", str(db_path)])
    found = runner.invoke(
        ux_processes,
        ["catalog", "search", "Writing", "--db-path", str(db_path)],
    )
    nothing = runner.invoke(
        ux_processes,
        ["catalog", "search", "blockchain", "--db-path", str(db_path)],
    )

    assert empty.exit_code == 0, empty.output
    assert "Catalog is empty" in empty.output
    assert indexed.exit_code == 0, indexed.output
    assert "Catalog indexed: 5 processes" in indexed.output
    assert "- ux-ui-design: 5" in indexed.output
    assert found.exit_code == 0, found.output
    assert "Matches: 1" in found.output
    assert "- ux-ui-design/ux-writing [ux-ui-design] tasks=16" in found.output
    assert "No processes match 'blockchain'." in nothing.output


def test_run_reports_missing_agent_binary(monkeypatch, isolated_env) -> None:
    monkeypatch.setenv("UX_PROCESSES_CLAUDE_COMMAND_TEMPLATE", "no-such-agent-binary {prompt}")
    monkeypatch.setenv("UX_PROCESSES_TASK_RETRIES", "0")
    monkeypatch.setenv("UX_PROCESSES_USE_PREFECT", "false")

    result = CliRunner().invoke(
        ux_processes,
        ["process", "run", "ux-ui-design/user-research", "--approval", "auto"],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Task failed" in result.output
    assert "no-such-agent-binary" in result.output
