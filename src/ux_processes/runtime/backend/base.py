"""Backend interface for agent effect execution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable


@dataclass(slots=True)
class BackendRunRequest:
    """Inputs required to execute one effect attempt."""

    manifest_path: Path
    timeout_seconds: int
    agent: str
    profile: str
    model: str
    command_template: str


@dataclass(slots=True)
class BackendRunResult:
    """Execution outcome from backend runner."""

    exit_code: int
    timed_out: bool
    stdout_path: Path
    stderr_path: Path
    elapsed_seconds: float = 0.0


@runtime_checkable
class AgentBackend(Protocol):
    """Protocol implemented by backend runners."""

    def run(self, request: BackendRunRequest) -> BackendRunResult:
        """Run an effect attempt and return execution metadata."""
