from __future__ import annotations

import allure

from ux_processes.processes import component_library
from ux_processes.runtime.testing import ScriptedProcessContext

pytestmark = [
    allure.epic("UX Processes"),
    allure.feature("Component Library"),
]

_COMPONENTS = [
    {"name": "Button", "category": "foundational"},
    {"name": "Input", "category": "foundational"},
    {"name": "DataTable", "category": "complex"},
    {"name": "Spinner", "category": "utility"},
    "Orphan",
]


def _responses(**overrides: object) -> dict[str, object]:
    responses: dict[str, object] = {
        "design-system-strategy": {
            "success": True,
            "componentCount": 4,
            "artifacts": [{"path": "strategy.md", "label": "Strategy"}],
        },
        "design-tokens-definition": {"tokenCount": 120, "designTokens": {"color": {}}},
        "color-system-design": {"accessibilityScore": 95},
        "component-inventory": {"components": _COMPONENTS},
        "component-design": lambda args: {
            "componentName": args["component"]["name"],
            "designFilePath": f"{args['component']['name']}.fig",
        },
        "accessibility-audit": {"overallScore": 93, "criticalIssues": []},
        "design-tool-library": {"tool": "Figma", "library": {"name": "Shop UI"}},
        "component-library-validation": {"validationScore": 91, "productionReady": True},
    }
    responses.update(overrides)
    return responses


def test_failed_strategy_returns_early() -> None:
    ctx = ScriptedProcessContext(
        responses={"design-system-strategy": {"success": False, "reason": "no scope"}},
    )

    result = component_library.process({"projectName": "Shop"}, ctx)

    assert ctx.task_names() == ["design-system-strategy"]
    assert ctx.breakpoints == []
    assert result["success"] is False
    assert result["error"] == "Design system strategy planning failed"
    assert result["details"] == {"success": False, "reason": "no scope"}
    assert result["metadata"]["processId"] == component_library.PROCESS_ID


def test_components_are_designed_per_category() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    result = component_library.process({"projectName": "Shop"}, ctx)

    designs = ctx.calls_for("component-design")
    assert [call.args["component"]["name"] for call in designs] == ["Button", "Input", "DataTable"]
    assert "foundationalComponents" not in designs[0].args
    assert [item["componentName"] for item in designs[2].args["foundationalComponents"]] == [
        "Button",
        "Input",
    ]
    assert designs[0].descriptor.title == "Component Design: Button - Shop"
    assert result["success"] is True
    assert result["componentLibrary"]["totalComponents"] == 5
    assert result["componentLibrary"]["foundationalComponents"] == 2
    assert result["componentLibrary"]["complexComponents"] == 1
    assert result["designTokens"]["tokenCount"] == 120
    assert ctx.breakpoints[0].context["files"] == [{"path": "strategy.md", "format": "markdown"}]
    assert ctx.breakpoints[1].context["files"][0]["label"] == "Component: Button"


def test_gates_open_only_for_low_color_score_and_critical_issues() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    component_library.process({"projectName": "Shop"}, ctx)

    assert ctx.breakpoint_titles() == [
        "Design System Strategy Review",
        "Foundational Components Review",
        "Design Library Review",
        "Component Library Complete",
    ]

    ctx = ScriptedProcessContext(
        responses=_responses(
            **{
                "color-system-design": {"accessibilityScore": 80},
                "accessibility-audit": {"overallScore": 70, "criticalIssues": ["contrast"]},
            },
        ),
    )

    result = component_library.process({"projectName": "Shop"}, ctx)

    assert ctx.breakpoint_titles() == [
        "Design System Strategy Review",
        "Color Accessibility Review",
        "Foundational Components Review",
        "Accessibility Compliance Gate",
        "Design Library Review",
        "Component Library Complete",
    ]
    assert result["accessibility"]["criticalIssues"] == 1


def test_optional_systems_and_release_readiness() -> None:
    ctx = ScriptedProcessContext(
        responses=_responses(
            **{"component-library-validation": {"validationScore": 60, "productionReady": False}},
        ),
    )

    result = component_library.process(
        {"projectName": "Shop", "includeIcons": False, "includeIllustrations": False},
        ctx,
    )

    names = ctx.task_names()
    assert "icon-system-design" not in names
    assert "illustration-system-design" not in names
    assert result["iconSystem"] is None
    assert result["success"] is False
    assert result["validation"]["productionReady"] is False
    assert ctx.breakpoints[-1].context["summary"]["icons"] == 0
    governance = ctx.calls_for("governance-versioning")[0]
    assert governance.args["componentLibrary"] == {"name": "Shop UI"}


def test_component_name_accepts_records_and_strings() -> None:
    assert component_library.component_name({"name": "Card"}) == "Card"
    assert component_library.component_name({}) == "component"
    assert component_library.component_name("Modal") == "Modal"
