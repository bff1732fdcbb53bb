"""Workdir materialization helpers for file-based effect execution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ux_processes.runtime.contracts import (
    CONTRACT_VERSION,
    EffectInputContract,
    EffectManifest,
    write_effect_input,
    write_manifest,
)
from ux_processes.runtime.prompts import render_prompt
from ux_processes.runtime.tasks import JobDescriptor


@dataclass(slots=True)
class MaterializedEffect:
    """Materialized file-based effect contract paths."""

    manifest_path: Path
    manifest: EffectManifest


class EffectWorkdirManager:
    """Creates the per-effect layout under ``<run_dir>/tasks/<effect_id>/``."""

    def __init__(self, run_dir: Path) -> None:
        self.run_dir = run_dir

    def materialize(  # noqa: PLR0913
        self,
        *,
        run_id: str,
        effect_id: str,
        task_name: str,
        descriptor: JobDescriptor,
        args: dict[str, Any],
        metadata: dict[str, Any] | None = None,
    ) -> MaterializedEffect:
        task_input_path = self.run_dir / descriptor.io.input_json_path
        output_result_path = self.run_dir / descriptor.io.output_json_path
        base_dir = task_input_path.parent
        base_dir.mkdir(parents=True, exist_ok=True)
        output_result_path.parent.mkdir(parents=True, exist_ok=True)

        prompt_path = base_dir / "prompt.txt"
        manifest_path = base_dir / "task.json"

        write_effect_input(
            task_input_path,
            EffectInputContract(
                task_name=task_name,
                descriptor=descriptor.to_dict(),
                args=args,
                metadata=dict(metadata or {}),
            ),
        )
        prompt_path.write_text(render_prompt(descriptor), "utf-8")

        manifest = EffectManifest(
            contract_version=CONTRACT_VERSION,
            run_id=run_id,
            effect_id=effect_id,
            task_name=task_name,
            workdir=str(base_dir),
            task_input_path=str(task_input_path),
            prompt_path=str(prompt_path),
            output_result_path=str(output_result_path),
            output_stdout_path=str(base_dir / "stdout.log"),
            output_stderr_path=str(base_dir / "stderr.log"),
        )
        write_manifest(manifest_path, manifest)
        return MaterializedEffect(manifest_path=manifest_path, manifest=manifest)
