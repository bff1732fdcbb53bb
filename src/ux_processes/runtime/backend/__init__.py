"""Agent backend implementations."""

from ux_processes.runtime.backend.base import AgentBackend, BackendRunRequest, BackendRunResult
from ux_processes.runtime.backend.cli_backend import BackendRunError, CliAgentBackend

__all__ = [
    "AgentBackend",
    "BackendRunError",
    "BackendRunRequest",
    "BackendRunResult",
    "CliAgentBackend",
]
