from __future__ import annotations

import allure

from ux_processes.processes import persona_development
from ux_processes.runtime.testing import ScriptedProcessContext

pytestmark = [
    allure.epic("UX Processes"),
    allure.feature("Persona Development"),
]


def _responses(*, depth: int, validation_score: int) -> dict[str, object]:
    return {
        "research-synthesis": {"researchDepthScore": depth, "participantCount": 12},
        "user-segmentation": {
            "segments": [{"name": "Admins"}, {"name": "Buyers"}, {"name": "Guests"}],
        },
        "persona-development": lambda args: {
            "persona": {"name": args["segment"]["name"][:-1], "age": 30, "extra": "dropped"},
            "artifacts": [{"path": f"persona-{args['segmentIndex']}.md"}],
        },
        "journey-mapping": lambda args: {
            "journeyMap": {"personaName": args["persona"]["name"], "stages": ["discover"]},
        },
        "persona-validation": {"overallValidationScore": validation_score},
    }


def test_low_research_depth_raises_warning_breakpoint() -> None:
    ctx = ScriptedProcessContext(responses=_responses(depth=45, validation_score=90))

    persona_development.process({"projectName": "Shop", "personaCount": 2}, ctx)

    assert ctx.breakpoint_titles() == [
        "Research Depth Warning",
        "Persona Review",
        "Persona Documentation Approval",
    ]


def test_sufficient_research_depth_skips_warning() -> None:
    ctx = ScriptedProcessContext(responses=_responses(depth=60, validation_score=90))

    persona_development.process({"projectName": "Shop"}, ctx)

    assert "Research Depth Warning" not in ctx.breakpoint_titles()


def test_personas_fan_out_is_capped_by_persona_count() -> None:
    ctx = ScriptedProcessContext(responses=_responses(depth=80, validation_score=70))

    result = persona_development.process({"projectName": "Shop", "personaCount": 2}, ctx)

    persona_calls = ctx.calls_for("persona-development")
    assert [call.args["segmentIndex"] for call in persona_calls] == [1, 2]
    assert len(ctx.calls_for("journey-mapping")) == 2
    assert [persona["name"] for persona in result["personas"]] == ["Admin", "Buyer"]
    assert "extra" not in result["personas"][0]
    assert result["personas"][0]["quote"] is None
    assert [journey["personaName"] for journey in result["journeyMaps"]] == ["Admin", "Buyer"]
    assert result["validationScore"] == 70
    assert result["validationPassed"] is False
    assert result["segmentation"]["totalSegments"] == 3
    assert result["researchSynthesis"]["participantCount"] == 12
    assert [artifact["path"] for artifact in result["artifacts"]] == [
        "persona-1.md",
        "persona-2.md",
    ]
    assert result["metadata"]["version"] == persona_development.PROCESS_VERSION


def test_validation_threshold_comes_from_inputs() -> None:
    ctx = ScriptedProcessContext(responses=_responses(depth=80, validation_score=70))

    result = persona_development.process(
        {"projectName": "Shop", "minimumValidationScore": 70},
        ctx,
    )

    assert result["validationPassed"] is True
    summary = ctx.breakpoints[-1].context["summary"]
    assert summary["validationPassed"] is True
    assert summary["totalPersonas"] == 3
