"""Local deterministic agent for dry runs and CLI backend integration tests.

Writes a result object that satisfies the required keys of the declared output
schema with neutral values, so any process can run end to end without a real
model.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from ux_processes.runtime.contracts import read_effect_input, read_manifest, write_json

_NEUTRAL_VALUES: dict[str, Any] = {
    "array": [],
    "boolean": True,
    "integer": 0,
    "number": 0,
    "object": {},
}


def main(argv: list[str] | None = None) -> int:
    """Run local deterministic echo generation."""

    parser = argparse.ArgumentParser()
    parser.add_argument("--task-manifest", required=True)
    parser.add_argument("--prompt-file", default=None, help="Ignored; accepted for templates.")
    parser.add_argument(
        "--score",
        type=float,
        default=None,
        help="Value used for numeric outputs instead of 0.",
    )
    args = parser.parse_args(argv)

    manifest = read_manifest(Path(args.task_manifest))
    effect_input = read_effect_input(Path(manifest.task_input_path))
    schema = effect_input.descriptor.get("agent", {}).get("output_schema", {})
    payload = build_echo_result(
        schema=schema,
        task_name=effect_input.task_name,
        score=args.score,
    )
    write_json(Path(manifest.output_result_path), payload)
    return 0


def build_echo_result(
    *,
    schema: dict[str, Any],
    task_name: str,
    score: float | None = None,
) -> dict[str, Any]:
    """Build a neutral result for ``schema``."""

    properties = schema.get("properties", {})
    result: dict[str, Any] = {}
    for key in schema.get("required", []):
        json_type = properties.get(key, {}).get("type", "string")
        if json_type == "string":
            result[key] = f"{task_name}: {key}"
        elif json_type in {"integer", "number"} and score is not None:
            result[key] = int(score) if json_type == "integer" else score
        else:
            neutral = _NEUTRAL_VALUES.get(json_type)
            result[key] = neutral.copy() if isinstance(neutral, list | dict) else neutral
    return result


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
