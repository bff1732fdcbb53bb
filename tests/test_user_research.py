from __future__ import annotations

import allure

from ux_processes.processes import user_research
from ux_processes.runtime.testing import ScriptedProcessContext

pytestmark = [
    allure.epic("UX Processes"),
    allure.feature("User Research"),
]


def _responses(**overrides: object) -> dict[str, object]:
    responses: dict[str, object] = {
        "research-planning": {
            "planApproved": True,
            "selectedMethods": [{"method": "interviews"}, "surveys", {"method": "unknown"}],
            "refinedObjectives": ["Understand checkout drop-off"],
        },
        "participant-recruitment": {"confirmedParticipants": [{"id": 1}, {"id": 2}]},
        "qualitative-data-collection": {"sessionCount": 8},
        "quantitative-data-collection": {"responseCount": 120},
        "data-synthesis": {
            "sufficientDataForPersonas": True,
            "sufficientDataForJourneys": True,
            "themes": [f"theme-{index}" for index in range(7)],
            "patterns": [f"pattern-{index}" for index in range(12)],
        },
        "insight-generation": {
            "insights": [{"priority": "critical"}, {"priority": "low"}],
        },
        "persona-creation": {"personas": [{"name": "Ana"}], "validationScore": 88},
        "research-quality-scoring": {"overallScore": 90},
        "recommendations-generation": {"recommendations": ["a", "b", "c"]},
    }
    responses.update(overrides)
    return responses


def test_unapproved_plan_returns_early() -> None:
    ctx = ScriptedProcessContext(
        responses={
            "research-planning": {"planApproved": False, "recommendations": ["narrow scope"]},
        },
    )

    result = user_research.process({"projectName": "Shop"}, ctx)

    assert ctx.task_names() == ["research-planning"]
    assert ctx.breakpoints == []
    assert result == {
        "success": False,
        "reason": "Research plan quality insufficient",
        "recommendations": ["narrow scope"],
        "metadata": {
            "processId": user_research.PROCESS_ID,
            "timestamp": "2025-01-01T00:00:00+00:00",
        },
    }
    assert [(line.level, line.message) for line in ctx.logs][-1] == (
        "warn",
        "Research plan needs refinement",
    )


def test_selected_methods_route_to_qualitative_and_quantitative_collection() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    result = user_research.process({"projectName": "Shop"}, ctx)

    qualitative = ctx.calls_for("qualitative-data-collection")
    quantitative = ctx.calls_for("quantitative-data-collection")
    assert qualitative[0].args["researchMethods"] == [{"method": "interviews"}]
    assert quantitative[0].args["researchMethods"] == ["surveys"]
    assert result["researchPlan"]["methods"] == ["interviews", "surveys", "unknown"]
    assert result["research"]["qualitativeSessions"] == 8
    assert result["research"]["quantitativeResponses"] == 120


def test_methods_outside_both_families_skip_collection() -> None:
    ctx = ScriptedProcessContext(
        responses=_responses(
            **{"research-planning": {"planApproved": True, "selectedMethods": ["ethnography"]}},
        ),
    )

    result = user_research.process({}, ctx)

    names = ctx.task_names()
    assert "qualitative-data-collection" not in names
    assert "quantitative-data-collection" not in names
    assert result["research"]["qualitativeSessions"] == 0
    assert result["research"]["quantitativeResponses"] == 0


def test_findings_are_capped_and_journeys_follow_inputs() -> None:
    ctx = ScriptedProcessContext(responses=_responses())

    result = user_research.process({"projectName": "Shop"}, ctx)

    assert "journey-mapping" not in ctx.task_names()
    assert result["journeyMaps"] is None
    assert len(result["findings"]["themes"]) == 7
    assert len(result["findings"]["patterns"]) == user_research.FINDINGS_LIMIT
    assert len(ctx.breakpoints[0].context["summary"]["keyThemes"]) == 5
    assert result["insights"]["criticalInsights"] == 1
    assert result["personas"]["total"] == 1
    assert result["recommendations"]["total"] == 3

    ctx = ScriptedProcessContext(responses=_responses())
    result = user_research.process({"generateJourneyMaps": True}, ctx)

    assert ctx.calls_for("journey-mapping")[0].args["personas"] == [{"name": "Ana"}]
    assert result["journeyMaps"] == {"total": 0, "maps": []}


def test_low_quality_skips_recommendations() -> None:
    ctx = ScriptedProcessContext(
        responses=_responses(**{"research-quality-scoring": {"overallScore": 50}}),
    )

    result = user_research.process({"projectName": "Shop"}, ctx)

    assert ctx.breakpoint_titles() == ["User Research Review"]
    assert "recommendations-generation" not in ctx.task_names()
    assert result["success"] is True
    assert result["qualityMet"] is False
    assert result["recommendations"] is None


def test_method_name_handles_records_and_strings() -> None:
    assert user_research.method_name({"method": "surveys"}) == "surveys"
    assert user_research.method_name("interviews") == "interviews"
    assert user_research.method_name({"name": "x"}) is None
    assert user_research.method_name(3) is None
