"""Runtime configuration for local process execution and the process catalog."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

SUPPORTED_AGENTS = ("claude", "codex", "gemini")
SUPPORTED_PROFILES = ("fast", "quality")
APPROVAL_MODES = ("auto", "console", "reject")


@dataclass(slots=True)
class RuntimeSettings:
    """Local runtime settings."""

    workdir_root: Path = Path(".ux_processes/runs")
    task_timeout_seconds: int = 900
    task_retries: int = 2
    task_retry_delay_seconds: int = 10
    max_parallel_tasks: int = 4
    approval_mode: str = "console"
    write_journal: bool = True
    use_prefect: bool = True


@dataclass(slots=True)
class AgentSettings:
    """CLI agent command templates and model routing."""

    default_agent: str = "claude"
    default_profile: str = "quality"
    claude_command_template: str = (
        "claude -p --model {model} --dangerously-skip-permissions {prompt}"
    )
    codex_command_template: str = "codex exec --model {model} --full-auto {prompt}"
    gemini_command_template: str = "gemini --model {model} --yolo --prompt {prompt}"
    claude_model_fast: str = "haiku"
    claude_model_quality: str = "sonnet"
    codex_model_fast: str = "gpt-5-codex-mini"
    codex_model_quality: str = "gpt-5-codex"
    gemini_model_fast: str = "gemini-2.5-flash"
    gemini_model_quality: str = "gemini-2.5-pro"
    task_profile_map: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class CatalogSettings:
    """Process catalog storage settings."""

    db_path: Path = Path(".ux_processes/catalog.db")
    busy_timeout_ms: int = 5_000


@dataclass(slots=True)
class Settings:
    """Application settings grouped by domain concerns."""

    runtime: RuntimeSettings = field(default_factory=RuntimeSettings)
    agents: AgentSettings = field(default_factory=AgentSettings)
    catalog: CatalogSettings = field(default_factory=CatalogSettings)

    @classmethod
    def from_env(
        cls,
        workdir_root: Path | None = None,
        db_path: Path | None = None,
    ) -> Settings:
        """Load settings from environment with sane defaults for local development."""

        agent_defaults = AgentSettings()
        return cls(
            runtime=RuntimeSettings(
                workdir_root=workdir_root
                or Path(os.getenv("UX_PROCESSES_WORKDIR_ROOT", ".ux_processes/runs")),
                task_timeout_seconds=int(os.getenv("UX_PROCESSES_TASK_TIMEOUT_SECONDS", "900")),
                task_retries=int(os.getenv("UX_PROCESSES_TASK_RETRIES", "2")),
                task_retry_delay_seconds=int(
                    os.getenv("UX_PROCESSES_TASK_RETRY_DELAY_SECONDS", "10"),
                ),
                max_parallel_tasks=int(os.getenv("UX_PROCESSES_MAX_PARALLEL_TASKS", "4")),
                approval_mode=os.getenv("UX_PROCESSES_APPROVAL_MODE", "console").strip().lower(),
                write_journal=_env_bool("UX_PROCESSES_WRITE_JOURNAL", default=True),
                use_prefect=_env_bool("UX_PROCESSES_USE_PREFECT", default=True),
            ),
            agents=AgentSettings(
                default_agent=os.getenv("UX_PROCESSES_DEFAULT_AGENT", "claude").strip().lower(),
                default_profile=os.getenv("UX_PROCESSES_DEFAULT_PROFILE", "quality")
                .strip()
                .lower(),
                claude_command_template=os.getenv(
                    "UX_PROCESSES_CLAUDE_COMMAND_TEMPLATE",
                    agent_defaults.claude_command_template,
                ),
                codex_command_template=os.getenv(
                    "UX_PROCESSES_CODEX_COMMAND_TEMPLATE",
                    agent_defaults.codex_command_template,
                ),
                gemini_command_template=os.getenv(
                    "UX_PROCESSES_GEMINI_COMMAND_TEMPLATE",
                    agent_defaults.gemini_command_template,
                ),
                claude_model_fast=os.getenv(
                    "UX_PROCESSES_CLAUDE_MODEL_FAST",
                    agent_defaults.claude_model_fast,
                ),
                claude_model_quality=os.getenv(
                    "UX_PROCESSES_CLAUDE_MODEL_QUALITY",
                    agent_defaults.claude_model_quality,
                ),
                codex_model_fast=os.getenv(
                    "UX_PROCESSES_CODEX_MODEL_FAST",
                    agent_defaults.codex_model_fast,
                ),
                codex_model_quality=os.getenv(
                    "UX_PROCESSES_CODEX_MODEL_QUALITY",
                    agent_defaults.codex_model_quality,
                ),
                gemini_model_fast=os.getenv(
                    "UX_PROCESSES_GEMINI_MODEL_FAST",
                    agent_defaults.gemini_model_fast,
                ),
                gemini_model_quality=os.getenv(
                    "UX_PROCESSES_GEMINI_MODEL_QUALITY",
                    agent_defaults.gemini_model_quality,
                ),
                task_profile_map=_collect_task_profile_map(),
            ),
            catalog=CatalogSettings(
                db_path=db_path
                or Path(os.getenv("UX_PROCESSES_CATALOG_DB_PATH", ".ux_processes/catalog.db")),
                busy_timeout_ms=int(os.getenv("UX_PROCESSES_CATALOG_BUSY_TIMEOUT_MS", "5000")),
            ),
        )

    def validate(self) -> None:
        """Raise configuration error if runtime or routing settings are out of range."""

        if self.runtime.task_timeout_seconds <= 0:
            raise ValueError("UX_PROCESSES_TASK_TIMEOUT_SECONDS must be > 0.")
        if self.runtime.task_retries < 0:
            raise ValueError("UX_PROCESSES_TASK_RETRIES must be >= 0.")
        if self.runtime.task_retry_delay_seconds < 0:
            raise ValueError("UX_PROCESSES_TASK_RETRY_DELAY_SECONDS must be >= 0.")
        if self.runtime.max_parallel_tasks <= 0:
            raise ValueError("UX_PROCESSES_MAX_PARALLEL_TASKS must be > 0.")
        if self.runtime.approval_mode not in APPROVAL_MODES:
            raise ValueError(
                f"Unsupported approval mode: {self.runtime.approval_mode!r}. "
                f"Use one of {APPROVAL_MODES}.",
            )
        if self.agents.default_agent not in SUPPORTED_AGENTS:
            raise ValueError(
                f"Unsupported agent: {self.agents.default_agent!r}. Use codex, claude, or gemini.",
            )
        profiles = [self.agents.default_profile, *self.agents.task_profile_map.values()]
        for profile in profiles:
            if profile not in SUPPORTED_PROFILES:
                raise ValueError(
                    f"Unsupported model profile: {profile!r}. Use one of {SUPPORTED_PROFILES}.",
                )


def _collect_task_profile_map() -> dict[str, str]:
    raw = os.getenv("UX_PROCESSES_TASK_PROFILE_MAP", "").strip()
    if not raw:
        return {}

    mapping: dict[str, str] = {}
    for part in raw.split(","):
        token = part.strip()
        if not token:
            continue
        if "=" not in token:
            raise ValueError(
                "Invalid UX_PROCESSES_TASK_PROFILE_MAP entry: "
                f"{token!r}. Expected format '<task-name>=<profile>'.",
            )
        task_name, profile = token.split("=", 1)
        mapping[task_name.strip().lower()] = profile.strip().lower()
    return mapping


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
