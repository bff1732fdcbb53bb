from __future__ import annotations

import allure
import pytest

from ux_processes.processes import accessibility_audit
from ux_processes.runtime.approval import RejectingApprover
from ux_processes.runtime.context import BreakpointRejected
from ux_processes.runtime.testing import ScriptedProcessContext

pytestmark = [
    allure.epic("UX Processes"),
    allure.feature("Accessibility Audit"),
]

_INPUTS = {
    "projectName": "Shop",
    "productUrl": "https://shop.example.com",
    "scope": ["home", "checkout"],
}


def _responses() -> dict[str, object]:
    return {
        "accessibility-audit-planning": {"artifacts": [{"path": "plan.md", "format": "markdown"}]},
        "automated-accessibility-scan": lambda args: {
            "barriers": [{"id": f"scan-{args['pageOrFlow']}", "severity": "high"}],
            "artifacts": [{"path": f"scan-{args['pageOrFlow']}.json"}],
        },
        "barrier-analysis-prioritization": {
            "prioritizedBarriers": [
                {"id": "scan-home", "severity": "critical"},
                {"id": "scan-checkout", "severity": "high"},
            ],
            "complianceScore": 72,
            "complianceLevel": "A",
        },
        "remediation-plan-creation": {
            "phases": [{"name": "quick wins"}],
            "totalTasks": 4,
            "estimatedEffort": "2 weeks",
            "expectedImprovementScore": 20,
        },
        "final-accessibility-assessment": {"verdict": "Needs work"},
    }


def test_audit_fans_out_scans_per_scope_item_and_totals_barriers() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    result = accessibility_audit.process(_INPUTS, ctx)

    scans = ctx.calls_for("automated-accessibility-scan")
    assert [call.args["pageOrFlow"] for call in scans] == ["home", "checkout"]
    assert result["success"] is True
    assert result["barriers"]["total"] == 2
    assert result["barriers"]["critical"] == 1
    assert result["barriers"]["high"] == 1
    assert result["barriers"]["details"][0]["id"] == "scan-home"
    assert result["complianceScore"] == 72
    assert result["meetsCompliance"] is False
    assert result["complianceGap"] == 28
    assert result["metadata"]["scope"] == 2
    assert result["metadata"]["wcagLevel"] == "AA"
    assert result["metadata"]["processId"] == accessibility_audit.PROCESS_ID
    assert result["duration"] == 1000
    assert result["vpatReport"] is None
    assert result["usabilityReport"] is None
    assert result["remediationPlan"]["totalTasks"] == 4
    assert [artifact["path"] for artifact in result["artifacts"]] == [
        "plan.md",
        "scan-home.json",
        "scan-checkout.json",
    ]


def test_audit_breakpoints_follow_phase_order() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    accessibility_audit.process(_INPUTS, ctx)

    assert ctx.breakpoint_titles() == [
        "Initial Audit Findings Review",
        "Remediation Plan Review",
        "Final Accessibility Audit Approval",
    ]
    initial = ctx.breakpoints[0]
    assert initial.context["summary"]["totalBarriers"] == 2
    assert initial.context["summary"]["automatedBarriers"] == 2
    assert ctx.breakpoints[1].context["plan"]["expectedScore"] == 92


def test_audit_optional_phases_follow_input_flags() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    result = accessibility_audit.process(
        {
            **_INPUTS,
            "performAutomatedScanning": False,
            "includeRemediation": False,
            "includeUsabilityTesting": True,
            "generateVPAT": True,
        },
        ctx,
    )

    names = ctx.task_names()
    assert "automated-accessibility-scan" not in names
    assert "remediation-plan-creation" not in names
    assert "assistive-technology-usability" in names
    assert "vpat-generation" in names
    assert result["remediationPlan"] is None
    assert result["vpatReport"] is not None
    assert result["barriers"]["total"] == 0
    assert "Remediation Plan Review" not in ctx.breakpoint_titles()


def test_meets_compliance_accepts_higher_levels() -> None:
    assert accessibility_audit.meets_compliance("AA", "AA")
    assert accessibility_audit.meets_compliance("AA", "AAA")
    assert accessibility_audit.meets_compliance("A", "AA")
    assert not accessibility_audit.meets_compliance("AAA", "AA")
    assert not accessibility_audit.meets_compliance("AA", "")


def test_rejected_breakpoint_aborts_audit() -> None:
    ctx = ScriptedProcessContext(responses=_responses(), approver=RejectingApprover("not yet"))

    with pytest.raises(BreakpointRejected) as error:
        accessibility_audit.process(_INPUTS, ctx)

    assert error.value.title == "Initial Audit Findings Review"
    assert error.value.feedback == "not yet"
    assert "keyboard-navigation-assessment" not in ctx.task_names()
