"""Declarative task definitions and the typed records passed between phases.

A task definition is a named, pure factory: given the phase arguments and the
invocation identity it returns a fresh :class:`JobDescriptor` describing one
agent job (prompt, output schema and file contract paths). Registries are
filled at import time and never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

DEFAULT_INPUT_JSON_PATH = "tasks/{effect_id}/input.json"
DEFAULT_OUTPUT_JSON_PATH = "tasks/{effect_id}/result.json"

_JSON_TYPES = ("array", "boolean", "integer", "number", "object", "string")


class TaskRegistryError(ValueError):
    """Raised for duplicate or unknown task names."""


@dataclass(slots=True)
class TaskInvocation:
    """Identity of one task call inside a process run."""

    effect_id: str
    run_id: str


@dataclass(slots=True)
class AgentPrompt:
    """Prompt handed to the agent."""

    role: str
    task: str
    context: dict[str, Any] = field(default_factory=dict)
    instructions: list[str] = field(default_factory=list)
    output_format: str = "JSON"


@dataclass(slots=True)
class AgentSpec:
    """Agent persona, prompt and expected output shape."""

    name: str
    prompt: AgentPrompt
    output_schema: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class TaskIO:
    """Relative file contract paths for one effect."""

    input_json_path: str
    output_json_path: str

    @classmethod
    def for_effect(cls, effect_id: str) -> TaskIO:
        return cls(
            input_json_path=DEFAULT_INPUT_JSON_PATH.format(effect_id=effect_id),
            output_json_path=DEFAULT_OUTPUT_JSON_PATH.format(effect_id=effect_id),
        )


@dataclass(slots=True)
class JobDescriptor:
    """Declarative description of one agent job."""

    kind: str
    title: str
    agent: AgentSpec
    io: TaskIO
    labels: list[str] = field(default_factory=list)
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize descriptor for the on-disk task contract."""

        return asdict(self)


TaskFactory = Callable[[Mapping[str, Any], TaskInvocation], JobDescriptor]


@dataclass(slots=True, frozen=True)
class TaskDefinition:
    """Named job template."""

    name: str
    factory: TaskFactory

    def build(self, args: Mapping[str, Any], invocation: TaskInvocation) -> JobDescriptor:
        """Return a fresh descriptor for one invocation."""

        return self.factory(args, invocation)


def define_task(name: str, factory: TaskFactory) -> TaskDefinition:
    """Create a task definition from a descriptor factory."""

    normalized = name.strip()
    if not normalized:
        raise TaskRegistryError("Task name must be a non-empty string.")
    return TaskDefinition(name=normalized, factory=factory)


def output_schema(outputs: Mapping[str, str]) -> dict[str, Any]:
    """Build an object JSON schema requiring every key of ``outputs``."""

    properties: dict[str, Any] = {}
    for key, json_type in outputs.items():
        if json_type not in _JSON_TYPES:
            raise TaskRegistryError(f"Unsupported JSON type for output {key!r}: {json_type!r}")
        properties[key] = {"type": json_type}
    return {"type": "object", "required": list(outputs), "properties": properties}


class TaskRegistry:
    """Task definitions of one process, keyed by task name."""

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace
        self._definitions: dict[str, TaskDefinition] = {}

    def define(self, name: str, factory: TaskFactory) -> TaskDefinition:
        definition = define_task(name, factory)
        if definition.name in self._definitions:
            raise TaskRegistryError(
                f"Task {definition.name!r} is already defined in {self.namespace!r}",
            )
        self._definitions[definition.name] = definition
        return definition

    def agent_task(  # noqa: PLR0913
        self,
        name: str,
        *,
        title: str | Callable[[Mapping[str, Any]], str],
        agent: str,
        role: str,
        task: str,
        instructions: list[str],
        outputs: Mapping[str, str],
        labels: list[str],
        description: str = "",
    ) -> TaskDefinition:
        """Define a standard agent task whose prompt context is the phase arguments."""

        schema = output_schema(outputs)
        frozen_instructions = tuple(instructions)
        frozen_labels = tuple(labels)

        def _factory(args: Mapping[str, Any], invocation: TaskInvocation) -> JobDescriptor:
            return JobDescriptor(
                kind="agent",
                title=title(args) if callable(title) else title,
                description=description,
                agent=AgentSpec(
                    name=agent,
                    prompt=AgentPrompt(
                        role=role,
                        task=task,
                        context=dict(args),
                        instructions=list(frozen_instructions),
                    ),
                    output_schema=_copy_schema(schema),
                ),
                io=TaskIO.for_effect(invocation.effect_id),
                labels=list(frozen_labels),
            )

        return self.define(name, _factory)

    def get(self, name: str) -> TaskDefinition:
        try:
            return self._definitions[name]
        except KeyError as error:
            raise TaskRegistryError(
                f"Unknown task {name!r} in {self.namespace!r}",
            ) from error

    def names(self) -> list[str]:
        return list(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[TaskDefinition]:
        return iter(self._definitions.values())


@dataclass(slots=True)
class PhaseResult:
    """Agent output of one phase with tolerant typed accessors."""

    task_name: str
    effect_id: str
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.data.get(key)
        return default if value is None else value

    def items(self, key: str) -> list[Any]:
        value = self.data.get(key)
        return list(value) if isinstance(value, list) else []

    def number(self, key: str, default: float = 0) -> float:
        value = self.data.get(key)
        if isinstance(value, bool) or not isinstance(value, int | float):
            return default
        return value

    def flag(self, key: str, default: bool = False) -> bool:
        value = self.data.get(key)
        return value if isinstance(value, bool) else default

    def text(self, key: str, default: str = "") -> str:
        value = self.data.get(key)
        return value if isinstance(value, str) else default

    def mapping(self, key: str) -> dict[str, Any]:
        value = self.data.get(key)
        return dict(value) if isinstance(value, dict) else {}

    @property
    def artifacts(self) -> list[Any]:
        return self.items("artifacts")

    def to_dict(self) -> dict[str, Any]:
        return dict(self.data)


def _copy_schema(schema: dict[str, Any]) -> dict[str, Any]:
    return {
        "type": schema["type"],
        "required": list(schema["required"]),
        "properties": {key: dict(value) for key, value in schema["properties"].items()},
    }
