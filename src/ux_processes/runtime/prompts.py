"""Prompt rendering for agent job descriptors."""

from __future__ import annotations

import json

from ux_processes.runtime.tasks import JobDescriptor

_FILE_IO_RULES = """
IMPORTANT — execution rules:
- Read task.json first to find the input file and the output path.
- The input file holds the full job descriptor and the phase arguments.
- Write the result as ONE JSON object to the output path from task.json.
- Every key listed as required in the output schema must be present.
- Do NOT print the result to stdout instead of writing the file.
"""


def render_prompt(descriptor: JobDescriptor) -> str:
    """Render the agent prompt of ``descriptor`` as plain text."""

    prompt = descriptor.agent.prompt
    lines = [
        f"You are a {prompt.role}.",
        "",
        f"Task: {prompt.task}",
    ]
    if descriptor.description:
        lines.extend(["", descriptor.description])
    if prompt.instructions:
        lines.extend(["", "Instructions:"])
        lines.extend(f"{index}. {step}" for index, step in enumerate(prompt.instructions, start=1))
    lines.extend(
        [
            "",
            "Context:",
            json.dumps(prompt.context, ensure_ascii=False, indent=2, sort_keys=True),
            "",
            f"Output format: {prompt.output_format}",
            "Output schema:",
            json.dumps(descriptor.agent.output_schema, ensure_ascii=False, indent=2),
        ],
    )
    return "\n".join(lines) + "\n" + _FILE_IO_RULES
