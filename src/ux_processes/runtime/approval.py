"""Breakpoint approvers for the local runtime."""

from __future__ import annotations

import json
import logging

import rich_click as click

from ux_processes.runtime.context import Approver, BreakpointRequest, Decision

logger = logging.getLogger(__name__)

_MAX_CONTEXT_FILES = 10


class AutoApprover:
    """Approve every breakpoint without asking."""

    def approve(self, request: BreakpointRequest) -> Decision:
        logger.info("Auto-approved breakpoint %r", request.title)
        return Decision(approved=True, decided_by="auto")


class RejectingApprover:
    """Decline every breakpoint; useful for dry runs that must stop at the first gate."""

    def __init__(self, feedback: str = "rejected by policy") -> None:
        self.feedback = feedback

    def approve(self, request: BreakpointRequest) -> Decision:
        logger.info("Rejected breakpoint %r", request.title)
        return Decision(approved=False, feedback=self.feedback, decided_by="reject")


class ConsoleApprover:
    """Ask the operator on the terminal."""

    def __init__(self, *, ask_feedback: bool = True) -> None:
        self.ask_feedback = ask_feedback

    def approve(self, request: BreakpointRequest) -> Decision:
        for line in render_request(request):
            click.echo(line)
        approved = click.confirm("Approve and continue?", default=True)
        feedback: str | None = None
        if self.ask_feedback:
            feedback = click.prompt("Feedback (optional)", default="", show_default=False) or None
        return Decision(approved=approved, feedback=feedback, decided_by="console")


def render_request(request: BreakpointRequest) -> list[str]:
    """Render a breakpoint request as plain console lines."""

    lines = [f"== {request.title} ==", request.question]
    summary = request.context.get("summary")
    if isinstance(summary, dict):
        lines.append("Summary:")
        lines.extend(
            f"  {key}: {json.dumps(value, ensure_ascii=False)}" for key, value in summary.items()
        )
    files = request.context.get("files")
    if isinstance(files, list) and files:
        lines.append("Files:")
        for entry in files[:_MAX_CONTEXT_FILES]:
            if isinstance(entry, dict):
                label = entry.get("label") or entry.get("path")
                lines.append(f"  - {label} [{entry.get('format', 'file')}] {entry.get('path')}")
            else:
                lines.append(f"  - {entry}")
    return lines


def build_approver(mode: str) -> Approver:
    """Build the approver configured by name."""

    normalized = mode.strip().lower()
    if normalized == "auto":
        return AutoApprover()
    if normalized == "console":
        return ConsoleApprover()
    if normalized == "reject":
        return RejectingApprover()
    raise ValueError(f"Unsupported approval mode: {mode!r}. Use auto, console, or reject.")
