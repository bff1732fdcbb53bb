"""File-based contracts for agent task inputs and outputs."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

CONTRACT_VERSION = 1


@dataclass(slots=True)
class EffectInputContract:
    """Task input payload consumed by the agent."""

    task_name: str
    descriptor: dict[str, Any]
    args: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class EffectManifest:
    """Manifest stored with each materialized effect."""

    contract_version: int
    run_id: str
    effect_id: str
    task_name: str
    workdir: str
    task_input_path: str
    prompt_path: str
    output_result_path: str
    output_stdout_path: str
    output_stderr_path: str


def write_json(path: Path, payload: dict[str, Any]) -> None:
    """Persist JSON payload using deterministic formatting."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True), "utf-8")


def load_json(path: Path) -> dict[str, Any]:
    """Load JSON document and validate top-level object type."""

    payload = json.loads(path.read_text("utf-8"))
    if not isinstance(payload, dict):
        raise TypeError(f"Expected JSON object in {path}")
    return payload


def write_effect_input(path: Path, payload: EffectInputContract) -> None:
    write_json(path, asdict(payload))


def read_effect_input(path: Path) -> EffectInputContract:
    """Deserialize and validate effect input contract."""

    raw = load_json(path)
    task_name = raw.get("task_name")
    descriptor = raw.get("descriptor")
    args = raw.get("args", {})
    metadata = raw.get("metadata", {})
    if not isinstance(task_name, str) or not task_name.strip():
        raise ValueError("input.task_name must be a non-empty string")
    if not isinstance(descriptor, dict):
        raise TypeError("input.descriptor must be an object")
    if not isinstance(args, dict):
        raise TypeError("input.args must be an object")
    if not isinstance(metadata, dict):
        raise TypeError("input.metadata must be an object")
    return EffectInputContract(
        task_name=task_name,
        descriptor=descriptor,
        args=args,
        metadata=metadata,
    )


def write_manifest(path: Path, manifest: EffectManifest) -> None:
    write_json(path, asdict(manifest))


def read_manifest(path: Path) -> EffectManifest:
    """Deserialize effect manifest."""

    raw = load_json(path)
    required = (
        "run_id",
        "effect_id",
        "task_name",
        "workdir",
        "task_input_path",
        "prompt_path",
        "output_result_path",
        "output_stdout_path",
        "output_stderr_path",
    )
    values: dict[str, str] = {}
    for key in required:
        value = raw.get(key)
        if not isinstance(value, str) or not value:
            raise ValueError(f"manifest.{key} must be a non-empty string")
        values[key] = value
    return EffectManifest(
        contract_version=int(raw.get("contract_version", CONTRACT_VERSION)),
        **values,
    )


def read_effect_result(path: Path) -> dict[str, Any]:
    """Read the agent result object written at ``path``."""

    return load_json(path)
