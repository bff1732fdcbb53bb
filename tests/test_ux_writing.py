from __future__ import annotations

import allure

from ux_processes.processes import ux_writing
from ux_processes.runtime.testing import ScriptedProcessContext

pytestmark = [
    allure.epic("UX Processes"),
    allure.feature("UX Writing Guidelines"),
]

_PATTERN_TASKS = (
    "error-message-patterns",
    "empty-state-patterns",
    "button-label-patterns",
    "onboarding-copy-patterns",
    "form-microcopy-patterns",
    "confirmation-message-patterns",
)


def _responses(quality: int = 90) -> dict[str, object]:
    responses: dict[str, object] = {
        "voice-tone-definition": {
            "voiceAttributes": [{"attribute": "friendly"}, "clear"],
            "toneModulations": 4,
            "artifacts": [{"path": "voice.md"}],
        },
        "microcopy-catalog": {"totalPatterns": 42},
        "content-audit": {
            "itemsAudited": 3,
            "issuesFound": 2,
            "reportPath": "audit.md",
            "recommendations": ["a", "b"],
        },
        "guidelines-quality-assessment": {"overallScore": quality},
        "writing-guidelines-document": {"masterDocumentPath": "guidelines.md"},
    }
    for index, name in enumerate(_PATTERN_TASKS, start=1):
        responses[name] = {"patternCount": index}
    return responses


def test_content_audit_is_skipped_without_existing_copy() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    result = ux_writing.process({"projectName": "Shop"}, ctx)

    assert "content-audit" not in ctx.task_names()
    assert result["contentAuditReport"] is None
    assert result["contentAuditResults"] is None
    assert result["writingGuidelines"] == "guidelines.md"
    assert ctx.breakpoints[-1].context["summary"]["deliverables"]["contentAuditIssues"] == 0


def test_content_audit_runs_for_existing_copy() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    result = ux_writing.process(
        {"projectName": "Shop", "existingCopy": [{"text": "Submit"}]},
        ctx,
    )

    assert ctx.calls_for("content-audit")[0].args["existingCopy"] == [{"text": "Submit"}]
    assert result["contentAuditReport"] == "audit.md"
    assert result["contentAuditResults"] == {
        "itemsAudited": 3,
        "issuesFound": 2,
        "complianceScore": None,
        "recommendationsCount": 2,
    }


def test_content_audit_can_be_disabled() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    ux_writing.process(
        {"projectName": "Shop", "existingCopy": ["x"], "includeContentAudit": False},
        ctx,
    )

    assert "content-audit" not in ctx.task_names()


def test_pattern_review_summarizes_counts_and_task_order() -> None:
    ctx = ScriptedProcessContext(responses=_responses(quality=60))

    result = ux_writing.process({}, ctx)

    assert ctx.task_names()[3:9] == list(_PATTERN_TASKS)
    assert ctx.breakpoint_titles() == [
        "Voice and Tone Review",
        "Microcopy Patterns Review",
        "UX Writing Guidelines Final Review",
    ]
    assert "friendly, clear" in ctx.breakpoints[0].question
    summary = ctx.breakpoints[1].context["summary"]
    assert summary["totalPatterns"] == 21
    assert summary["errorPatterns"] == 1
    assert summary["confirmationPatterns"] == 6
    assert result["projectName"] == "Project"
    assert result["qualityMet"] is False
    assert result["microcopyCatalog"]["totalPatterns"] == 42
    assert ctx.breakpoints[0].context["files"] == [
        {"path": "voice.md", "format": "markdown", "label": "Voice & Tone"},
    ]
