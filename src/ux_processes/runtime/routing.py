"""Routing resolution helpers for per-effect agent execution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from ux_processes.config import SUPPORTED_AGENTS, SUPPORTED_PROFILES, AgentSettings

ROUTING_SCHEMA_VERSION = 1


@dataclass(slots=True)
class FrozenRouting:
    """Resolved immutable routing stored in effect metadata."""

    schema_version: int
    agent: str
    profile: str
    model: str
    command_template: str
    resolved_at: str

    def to_metadata(self) -> dict[str, object]:
        """Serialize frozen routing for effect input metadata."""

        return {
            "schema_version": self.schema_version,
            "agent": self.agent,
            "profile": self.profile,
            "model": self.model,
            "command_template": self.command_template,
            "resolved_at": self.resolved_at,
        }


@dataclass(slots=True)
class RoutingDefaults:
    """Settings snapshot used for routing every effect of a run."""

    default_agent: str
    default_profile: str
    task_profile_map: dict[str, str]
    command_templates: dict[str, str]
    models: dict[str, dict[str, str]]

    @classmethod
    def from_settings(cls, settings: AgentSettings) -> RoutingDefaults:
        """Build validated defaults from agent settings."""

        default_agent = _normalize(settings.default_agent)
        _validate_supported_agent(default_agent)
        default_profile = _normalize(settings.default_profile)
        _validate_supported_profile(default_profile)
        command_templates = {
            "claude": settings.claude_command_template,
            "codex": settings.codex_command_template,
            "gemini": settings.gemini_command_template,
        }
        for agent, template in command_templates.items():
            if not template.strip():
                raise ValueError(f"Empty command template for agent={agent!r}")
        models = {
            "claude": {
                "fast": settings.claude_model_fast,
                "quality": settings.claude_model_quality,
            },
            "codex": {
                "fast": settings.codex_model_fast,
                "quality": settings.codex_model_quality,
            },
            "gemini": {
                "fast": settings.gemini_model_fast,
                "quality": settings.gemini_model_quality,
            },
        }
        for agent, profile_models in models.items():
            for profile, model in profile_models.items():
                if not model.strip():
                    raise ValueError(f"Empty model id for agent={agent!r}, profile={profile!r}")
        task_profile_map: dict[str, str] = {}
        for task_name, profile in settings.task_profile_map.items():
            normalized_profile = _normalize(profile)
            _validate_supported_profile(normalized_profile)
            task_profile_map[_normalize(task_name)] = normalized_profile
        return cls(
            default_agent=default_agent,
            default_profile=default_profile,
            task_profile_map=task_profile_map,
            command_templates=command_templates,
            models=models,
        )


def resolve_routing(
    *,
    defaults: RoutingDefaults,
    task_name: str,
    agent_override: str | None = None,
    profile_override: str | None = None,
    model_override: str | None = None,
) -> FrozenRouting:
    """Resolve and freeze routing for one effect."""

    agent = _normalize(agent_override) if agent_override is not None else defaults.default_agent
    _validate_supported_agent(agent)
    profile = (
        _normalize(profile_override)
        if profile_override is not None
        else defaults.task_profile_map.get(_normalize(task_name), defaults.default_profile)
    )
    _validate_supported_profile(profile)
    model = model_override.strip() if model_override is not None else defaults.models[agent][profile]
    if not model:
        raise ValueError(f"Resolved model is empty for agent={agent!r}, profile={profile!r}")
    command_template = defaults.command_templates[agent].strip()
    if not command_template:
        raise ValueError(f"Resolved command template is empty for agent={agent!r}")
    return FrozenRouting(
        schema_version=ROUTING_SCHEMA_VERSION,
        agent=agent,
        profile=profile,
        model=model,
        command_template=command_template,
        resolved_at=datetime.now(tz=UTC).isoformat(),
    )


def _normalize(value: str) -> str:
    return value.strip().lower()


def _validate_supported_agent(agent: str) -> None:
    if agent in SUPPORTED_AGENTS:
        return
    raise ValueError(f"Unsupported agent: {agent!r}. Use codex, claude, or gemini.")


def _validate_supported_profile(profile: str) -> None:
    if profile not in SUPPORTED_PROFILES:
        raise ValueError(
            f"Unsupported model profile: {profile!r}. Use one of {SUPPORTED_PROFILES}.",
        )
