"""Parse ``@process`` metadata tags out of a process module docstring."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_PROCESS_RE = re.compile(r"@process\s+(\S+)")
_DESCRIPTION_RE = re.compile(r"@description\s+(.*?)(?=\n\s*@\w|\Z)", re.DOTALL)
_OPEN = "{[("
_CLOSE = "}])"


@dataclass(slots=True)
class DocField:
    name: str
    type: str
    required: bool = True


@dataclass(slots=True)
class ProcessDocblock:
    """Catalog metadata declared in a process docstring."""

    process_id: str
    description: str = ""
    inputs: str | None = None
    outputs: str | None = None
    input_fields: list[DocField] = field(default_factory=list)
    output_fields: list[DocField] = field(default_factory=list)


def parse_docblock(text: str) -> ProcessDocblock | None:
    """Extract tags from ``text``; ``None`` when it declares no ``@process``."""

    match = _PROCESS_RE.search(text)
    if match is None:
        return None

    description_match = _DESCRIPTION_RE.search(text)
    if description_match is not None:
        description = " ".join(description_match.group(1).split())
    else:
        description = _first_paragraph_line(text)

    inputs = extract_braced(text, "@inputs")
    outputs = extract_braced(text, "@outputs")
    return ProcessDocblock(
        process_id=match.group(1).strip(),
        description=description,
        inputs=inputs,
        outputs=outputs,
        input_fields=parse_fields(inputs) if inputs else [],
        output_fields=parse_fields(outputs) if outputs else [],
    )


def extract_braced(text: str, tag: str) -> str | None:
    """Return the balanced ``{...}`` group that follows ``tag``, whitespace-collapsed."""

    start = text.find(tag)
    if start < 0:
        return None
    brace = text.find("{", start + len(tag))
    if brace < 0 or text[start + len(tag) : brace].strip():
        return None

    depth = 0
    for index in range(brace, len(text)):
        char = text[index]
        if char in _OPEN:
            depth += 1
        elif char in _CLOSE:
            depth -= 1
            if depth == 0:
                return " ".join(text[brace : index + 1].split())
    return None


def parse_fields(definition: str) -> list[DocField]:
    """Parse ``{ name: type, other?: type }`` into field records."""

    body = definition.strip()
    if body.startswith("{") and body.endswith("}"):
        body = body[1:-1]

    fields: list[DocField] = []
    for part in split_top_level(body):
        name, sep, type_ = part.partition(":")
        if not sep:
            continue
        name = name.strip()
        required = not name.endswith("?")
        fields.append(DocField(name=name.rstrip("?"), type=type_.strip(), required=required))
    return fields


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on ``separator`` outside of any bracket pair."""

    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in text:
        if char in _OPEN:
            depth += 1
        elif char in _CLOSE:
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    tail = "".join(current)
    if tail.strip():
        parts.append(tail)
    return [part.strip() for part in parts if part.strip()]


def category_for(process_id: str) -> str:
    """Second-to-last path segment of a process id, ``general`` for flat ids."""

    segments = [segment for segment in process_id.split("/") if segment]
    if len(segments) < 2:  # noqa: PLR2004
        return "general"
    return segments[-2]


def _first_paragraph_line(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("@"):
            return stripped
    return ""
