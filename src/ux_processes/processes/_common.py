"""Helpers shared by the process modules."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from ux_processes.runtime.tasks import PhaseResult

MAX_BREAKPOINT_FILES = 10


class ProcessInputError(ValueError):
    """Process inputs are not a JSON object."""


def ensure_inputs(inputs: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if inputs is None:
        return {}
    if not isinstance(inputs, Mapping):
        raise ProcessInputError(f"Process inputs must be an object, got {type(inputs).__name__}")
    return inputs


def option(inputs: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Input value with ``default`` applied to missing or null entries."""

    value = inputs.get(key)
    if value is None:
        return _fresh(default)
    return value


def elapsed_ms(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() * 1000)


def artifact_files(
    artifacts: Iterable[Any],
    *,
    limit: int | None = MAX_BREAKPOINT_FILES,
    default_format: str = "html",
    default_label: str | None = None,
) -> list[dict[str, Any]]:
    """First ``limit`` artifacts (all when ``None``) as breakpoint file references."""

    files: list[dict[str, Any]] = []
    for artifact in artifacts:
        if limit is not None and len(files) >= limit:
            break
        if not isinstance(artifact, Mapping):
            continue
        files.append(
            {
                "path": artifact.get("path"),
                "format": artifact.get("format") or default_format,
                "label": artifact.get("label") or default_label,
            },
        )
    return files


def file_ref(path: Any, fmt: str, label: str) -> dict[str, Any]:
    return {"path": path, "format": fmt, "label": label}


def count_where(items: Iterable[Any], key: str, value: Any) -> int:
    return sum(1 for item in items if isinstance(item, Mapping) and item.get(key) == value)


def base_metadata(process_id: str, timestamp: datetime, **extra: Any) -> dict[str, Any]:
    return {"processId": process_id, "timestamp": timestamp.isoformat(), **extra}


def _fresh(default: Any) -> Any:
    if isinstance(default, list):
        return list(default)
    if isinstance(default, dict):
        return dict(default)
    return default


def dump_result(result: PhaseResult | None) -> dict[str, Any] | None:
    return result.to_dict() if result is not None else None


def dump_results(results: list[PhaseResult] | None) -> list[dict[str, Any]] | None:
    if results is None:
        return None
    return [result.to_dict() for result in results]
