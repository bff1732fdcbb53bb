"""Shared test fixtures."""

from __future__ import annotations

import sys
from dataclasses import replace

import pytest
from prefect.testing.utilities import prefect_test_harness

from ux_processes.config import CatalogSettings, RuntimeSettings, Settings

_ECHO_AGENT_COMMAND_TEMPLATE = (
    f"{sys.executable} -m ux_processes.runtime.backend.echo_agent "
    "--task-manifest {task_manifest} --prompt-file {prompt_file}"
)


def _with_echo_agent(settings: Settings) -> Settings:
    agents = replace(
        settings.agents,
        claude_command_template=_ECHO_AGENT_COMMAND_TEMPLATE,
        codex_command_template=_ECHO_AGENT_COMMAND_TEMPLATE,
        gemini_command_template=_ECHO_AGENT_COMMAND_TEMPLATE,
    )
    runtime = replace(
        settings.runtime,
        task_retries=0,
        task_retry_delay_seconds=0,
        task_timeout_seconds=60,
        approval_mode="auto",
        use_prefect=False,
    )
    return replace(settings, agents=agents, runtime=runtime)


@pytest.fixture()
def echo_agent(monkeypatch):
    """Monkeypatch Settings.from_env to use the echo agent for every CLI agent."""
    original_from_env = Settings.from_env

    def _patched_from_env(workdir_root=None, db_path=None):
        return _with_echo_agent(original_from_env(workdir_root=workdir_root, db_path=db_path))

    monkeypatch.setattr(Settings, "from_env", staticmethod(_patched_from_env))


@pytest.fixture()
def echo_settings(tmp_path) -> Settings:
    """Settings rooted in ``tmp_path`` that route every agent through the echo agent."""

    return _with_echo_agent(
        Settings(
            runtime=RuntimeSettings(workdir_root=tmp_path / "runs"),
            catalog=CatalogSettings(db_path=tmp_path / "catalog.db"),
        ),
    )


@pytest.fixture()
def isolated_env(monkeypatch, tmp_path):
    """Point run folders and the catalog at ``tmp_path``."""

    monkeypatch.setenv("UX_PROCESSES_WORKDIR_ROOT", str(tmp_path / "runs"))
    monkeypatch.setenv("UX_PROCESSES_CATALOG_DB_PATH", str(tmp_path / "catalog.db"))
    for name in (
        "UX_PROCESSES_APPROVAL_MODE",
        "UX_PROCESSES_DEFAULT_AGENT",
        "UX_PROCESSES_DEFAULT_PROFILE",
        "UX_PROCESSES_TASK_PROFILE_MAP",
        "UX_PROCESSES_WRITE_JOURNAL",
        "UX_PROCESSES_USE_PREFECT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture(scope="session")
def prefect_harness():
    """Run Prefect flows and tasks against a throwaway local API."""

    with prefect_test_harness():
        yield
