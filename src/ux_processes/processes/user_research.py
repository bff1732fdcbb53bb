"""User research and discovery process.

@process ux-ui-design/user-research
@description User Research and Discovery - research planning, participant recruitment,
qualitative and quantitative data collection, synthesis into prioritized insights, optional
personas and journey maps, with quality scoring and recommendations.
@inputs { projectName: string, researchObjectives?: array, researchMethods?: array,
participantCriteria?: object, participantCount?: number, timeline?: string, budget?: object,
targetInsightQuality?: number, generatePersonas?: boolean, generateJourneyMaps?: boolean }
@outputs { success: boolean, qualityScore: number, qualityMet: boolean, researchReport: string,
findings: object, insights: object, personas: object, journeyMaps: object,
recommendations: object, artifacts: array }
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ux_processes.processes._common import (
    artifact_files,
    base_metadata,
    count_where,
    dump_result,
    dump_results,
    elapsed_ms,
    ensure_inputs,
    option,
)
from ux_processes.runtime.context import ProcessContext
from ux_processes.runtime.tasks import PhaseResult, TaskRegistry

PROCESS_ID = "ux-ui-design/user-research"
TASKS = TaskRegistry(PROCESS_ID)

QUALITATIVE_METHODS = frozenset(
    {"interviews", "contextual-inquiry", "focus-groups", "usability-testing", "diary-studies"},
)
QUANTITATIVE_METHODS = frozenset(
    {"surveys", "analytics", "card-sorting", "tree-testing", "first-click-testing"},
)
FINDINGS_LIMIT = 10
KEY_THEMES_LIMIT = 5

planning_task = TASKS.agent_task(
    "research-planning",
    title="Plan research scope and methodology",
    agent="ux-research-planner",
    role="senior UX researcher and research strategist",
    task="Refine research objectives and select methods that answer them within the "
    "timeline and budget",
    instructions=[
        "Rewrite objectives so each one is answerable",
        "Select methods and give each a rationale",
        "Draft screener questions from the participant criteria",
        "Approve the plan only when objectives, methods and budget line up",
    ],
    outputs={
        "refinedObjectives": "array",
        "selectedMethods": "array",
        "refinedCriteria": "object",
        "screenerQuestions": "array",
        "planApproved": "boolean",
        "recommendations": "array",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "planning"],
)

recruitment_task = TASKS.agent_task(
    "participant-recruitment",
    title="Recruit and screen research participants",
    agent="participant-recruiter",
    role="UX research recruiter and coordinator",
    task="Recruit and screen participants that match the criteria",
    instructions=["Balance the participant pool", "Score the pool's diversity 0-100"],
    outputs={
        "confirmedParticipants": "array",
        "participantProfiles": "array",
        "diversityScore": "number",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "recruitment"],
)

protocol_task = TASKS.agent_task(
    "protocol-development",
    title="Develop research protocols and guides",
    agent="protocol-developer",
    role="UX researcher and research methodologist",
    task="Write a protocol or discussion guide for every selected method",
    instructions=["Map every question to a research objective"],
    outputs={"protocols": "array", "artifacts": "array"},
    labels=["agent", "user-research", "protocols"],
)

qualitative_task = TASKS.agent_task(
    "qualitative-data-collection",
    title="Conduct qualitative research sessions",
    agent="qualitative-researcher",
    role="experienced UX researcher and qualitative interviewer",
    task="Run the qualitative sessions and capture observations and quotes",
    instructions=["Summarize each session", "Keep verbatim quotes with participant ids"],
    outputs={
        "sessionCount": "number",
        "sessionSummaries": "array",
        "observations": "array",
        "quotes": "array",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "qualitative"],
)

quantitative_task = TASKS.agent_task(
    "quantitative-data-collection",
    title="Conduct quantitative research and collect metrics",
    agent="quantitative-researcher",
    role="UX researcher and data analyst",
    task="Run the quantitative studies and report metrics",
    instructions=["Report sample sizes with every metric"],
    outputs={
        "responseCount": "number",
        "metrics": "object",
        "keyFindings": "array",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "quantitative"],
)

synthesis_task = TASKS.agent_task(
    "data-synthesis",
    title="Synthesize research data and extract patterns",
    agent="research-analyst",
    role="senior UX researcher and data synthesis specialist",
    task="Synthesize qualitative and quantitative data into themes and patterns",
    instructions=[
        "Triangulate findings across methods",
        "Identify pain points and opportunities",
        "State whether the data supports personas and journey maps",
    ],
    outputs={
        "themes": "array",
        "patterns": "array",
        "painPoints": "array",
        "opportunities": "array",
        "findings": "array",
        "userSegments": "array",
        "touchpoints": "array",
        "dataQuality": "string",
        "sufficientDataForPersonas": "boolean",
        "sufficientDataForJourneys": "boolean",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "synthesis"],
)

insight_task = TASKS.agent_task(
    "insight-generation",
    title="Generate and prioritize actionable insights",
    agent="insight-strategist",
    role="senior UX strategist and insight generator",
    task="Turn synthesis findings into prioritized, actionable insights",
    instructions=["Give every insight a priority of critical, high, medium or low"],
    outputs={"insights": "array", "criticalInsights": "array", "artifacts": "array"},
    labels=["agent", "user-research", "insights"],
)

persona_task = TASKS.agent_task(
    "persona-creation",
    title="Create research-based personas",
    agent="persona-designer",
    role="UX researcher and persona specialist",
    task="Create personas from the research findings and user segments",
    instructions=["Back every persona attribute with a finding"],
    outputs={"personas": "array", "validationScore": "number", "artifacts": "array"},
    labels=["agent", "user-research", "personas"],
)

journey_mapping_task = TASKS.agent_task(
    "journey-mapping",
    title="Create user journey maps",
    agent="journey-mapper",
    role="UX researcher and service designer",
    task="Map user journeys across touchpoints with pain points marked",
    instructions=["One journey map per persona, or per segment when there are no personas"],
    outputs={"journeyMaps": "array", "artifacts": "array"},
    labels=["agent", "user-research", "journey-mapping"],
)

report_task = TASKS.agent_task(
    "research-report-generation",
    title="Generate comprehensive research report",
    agent="research-writer",
    role="UX researcher and technical writer",
    task="Write the research report with an executive summary",
    instructions=["Lead with key findings", "Document methodology and limitations"],
    outputs={
        "reportPath": "string",
        "executiveSummary": "string",
        "keyFindings": "array",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "report"],
)

quality_task = TASKS.agent_task(
    "research-quality-scoring",
    title="Score research quality and completeness",
    agent="research-validator",
    role="principal UX researcher and research quality auditor",
    task="Score research rigor, coverage and readiness for design",
    instructions=["Calculate an overall score from 0 to 100"],
    outputs={
        "overallScore": "number",
        "componentScores": "object",
        "readinessForDesign": "boolean",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "quality"],
)

recommendations_task = TASKS.agent_task(
    "recommendations-generation",
    title="Generate actionable recommendations and next steps",
    agent="ux-strategist",
    role="senior UX strategist and product advisor",
    task="Recommend design actions and next steps from the insights",
    instructions=["Separate quick wins from long-term initiatives"],
    outputs={
        "recommendations": "array",
        "prioritizedRecommendations": "array",
        "quickWins": "array",
        "longTermInitiatives": "array",
        "nextSteps": "array",
        "artifacts": "array",
    },
    labels=["agent", "user-research", "recommendations"],
)


def method_name(method: Any) -> str | None:
    """Name of a selected method, given as a ``{"method": ...}`` record or a bare string."""

    if isinstance(method, Mapping):
        value = method.get("method")
        return value if isinstance(value, str) else None
    return method if isinstance(method, str) else None


def _methods_in(selected: list[Any], family: frozenset[str]) -> list[Any]:
    return [method for method in selected if method_name(method) in family]


def process(inputs: Mapping[str, Any], ctx: ProcessContext) -> dict[str, Any]:  # noqa: PLR0915
    inputs = ensure_inputs(inputs)
    project_name = option(inputs, "projectName", "Project")
    research_objectives = option(inputs, "researchObjectives", [])
    research_methods = option(
        inputs,
        "researchMethods",
        ["interviews", "surveys", "usability-testing"],
    )
    participant_criteria = option(inputs, "participantCriteria", {})
    participant_count = option(inputs, "participantCount", 10)
    timeline = option(inputs, "timeline", "4 weeks")
    budget = option(inputs, "budget", {})
    output_dir = option(inputs, "outputDir", "user-research-output")
    target_insight_quality = option(inputs, "targetInsightQuality", 85)
    generate_personas = option(inputs, "generatePersonas", True)
    generate_journey_maps = option(inputs, "generateJourneyMaps", False)

    start_time = ctx.now()
    artifacts: list[Any] = []

    ctx.log("info", f"Starting User Research and Discovery for {project_name}")

    ctx.log("info", "Phase 1: Planning research scope and methodology")
    planning = ctx.task(
        planning_task,
        {
            "projectName": project_name,
            "researchObjectives": research_objectives,
            "researchMethods": research_methods,
            "participantCriteria": participant_criteria,
            "participantCount": participant_count,
            "timeline": timeline,
            "budget": budget,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(planning.artifacts)

    if not planning.flag("planApproved"):
        ctx.log("warn", "Research plan needs refinement")
        return {
            "success": False,
            "reason": "Research plan quality insufficient",
            "recommendations": planning.get("recommendations"),
            "metadata": base_metadata(PROCESS_ID, start_time),
        }

    selected_methods = planning.items("selectedMethods")
    refined_objectives = planning.get("refinedObjectives")

    ctx.log("info", "Phase 2: Recruiting and screening research participants")
    incentives = budget.get("incentives") if isinstance(budget, Mapping) else None
    recruitment = ctx.task(
        recruitment_task,
        {
            "projectName": project_name,
            "participantCriteria": planning.get("refinedCriteria"),
            "participantCount": participant_count,
            "researchMethods": selected_methods,
            "screenerQuestions": planning.get("screenerQuestions"),
            "incentives": incentives or {},
            "outputDir": output_dir,
        },
    )
    artifacts.extend(recruitment.artifacts)
    confirmed_participants = recruitment.items("confirmedParticipants")

    ctx.log("info", "Phase 3: Developing research protocols and guides")
    protocols = ctx.task(
        protocol_task,
        {
            "projectName": project_name,
            "researchObjectives": refined_objectives,
            "researchMethods": selected_methods,
            "participantProfiles": recruitment.get("participantProfiles"),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(protocols.artifacts)

    qualitative_results: list[PhaseResult] = []
    qualitative_methods = _methods_in(selected_methods, QUALITATIVE_METHODS)
    if qualitative_methods:
        ctx.log("info", "Phase 4: Conducting qualitative research")
        qualitative = ctx.task(
            qualitative_task,
            {
                "projectName": project_name,
                "researchMethods": qualitative_methods,
                "protocols": protocols.get("protocols"),
                "participants": confirmed_participants,
                "outputDir": output_dir,
            },
        )
        artifacts.extend(qualitative.artifacts)
        qualitative_results.append(qualitative)

    quantitative_results: list[PhaseResult] = []
    quantitative_methods = _methods_in(selected_methods, QUANTITATIVE_METHODS)
    if quantitative_methods:
        ctx.log("info", "Phase 5: Conducting quantitative research")
        quantitative = ctx.task(
            quantitative_task,
            {
                "projectName": project_name,
                "researchMethods": quantitative_methods,
                "protocols": protocols.get("protocols"),
                "participantCount": participant_count,
                "outputDir": output_dir,
            },
        )
        artifacts.extend(quantitative.artifacts)
        quantitative_results.append(quantitative)

    ctx.log("info", "Phase 6: Synthesizing research data and extracting insights")
    synthesis = ctx.task(
        synthesis_task,
        {
            "projectName": project_name,
            "researchObjectives": refined_objectives,
            "qualitativeData": dump_results(qualitative_results),
            "quantitativeData": dump_results(quantitative_results),
            "researchMethods": selected_methods,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(synthesis.artifacts)

    ctx.log("info", "Phase 7: Generating and prioritizing actionable insights")
    insight_generation = ctx.task(
        insight_task,
        {
            "projectName": project_name,
            "researchObjectives": refined_objectives,
            "synthesisFindings": synthesis.get("findings"),
            "themes": synthesis.get("themes"),
            "patterns": synthesis.get("patterns"),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(insight_generation.artifacts)
    insights = insight_generation.items("insights")

    persona_creation = None
    if generate_personas and synthesis.flag("sufficientDataForPersonas"):
        ctx.log("info", "Phase 8: Creating research-based personas")
        persona_creation = ctx.task(
            persona_task,
            {
                "projectName": project_name,
                "researchFindings": synthesis.get("findings"),
                "userSegments": synthesis.get("userSegments"),
                "behavioralPatterns": synthesis.get("patterns"),
                "outputDir": output_dir,
            },
        )
        artifacts.extend(persona_creation.artifacts)
    personas = persona_creation.items("personas") if persona_creation is not None else []

    journey_mapping = None
    if generate_journey_maps and synthesis.flag("sufficientDataForJourneys"):
        ctx.log("info", "Phase 9: Creating user journey maps")
        journey_mapping = ctx.task(
            journey_mapping_task,
            {
                "projectName": project_name,
                "researchFindings": synthesis.get("findings"),
                "personas": personas,
                "touchpoints": synthesis.get("touchpoints"),
                "painPoints": synthesis.get("painPoints"),
                "outputDir": output_dir,
            },
        )
        artifacts.extend(journey_mapping.artifacts)
    journey_maps = journey_mapping.items("journeyMaps") if journey_mapping is not None else []

    ctx.log("info", "Phase 10: Generating comprehensive research report")
    report = ctx.task(
        report_task,
        {
            "projectName": project_name,
            "researchPlanning": planning.to_dict(),
            "participantRecruitment": recruitment.to_dict(),
            "qualitativeResults": dump_results(qualitative_results),
            "quantitativeResults": dump_results(quantitative_results),
            "dataSynthesis": synthesis.to_dict(),
            "insightGeneration": insight_generation.to_dict(),
            "personaCreation": dump_result(persona_creation),
            "journeyMapping": dump_result(journey_mapping),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(report.artifacts)

    ctx.log("info", "Phase 11: Evaluating research quality and completeness")
    quality = ctx.task(
        quality_task,
        {
            "projectName": project_name,
            "researchObjectives": refined_objectives,
            "participantCount": len(confirmed_participants),
            "methodsDiversity": len(selected_methods),
            "dataSynthesis": synthesis.to_dict(),
            "insightGeneration": insight_generation.to_dict(),
            "researchReport": report.to_dict(),
            "targetInsightQuality": target_insight_quality,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(quality.artifacts)

    quality_score = quality.number("overallScore")
    quality_met = quality_score >= target_insight_quality

    verdict = (
        "Research meets quality standards!"
        if quality_met
        else "Research may need additional investigation."
    )
    ctx.breakpoint(
        question=(
            f"User research complete. Quality score: {quality_score}/100. {verdict} "
            "Review findings?"
        ),
        title="User Research Review",
        context={
            "runId": ctx.run_id,
            "files": artifact_files(artifacts, limit=None, default_format="markdown"),
            "summary": {
                "projectName": project_name,
                "qualityScore": quality_score,
                "qualityMet": quality_met,
                "participantsRecruited": len(confirmed_participants),
                "methodsUsed": len(selected_methods),
                "insightsGenerated": len(insights),
                "personasCreated": len(personas),
                "journeyMapsCreated": len(journey_maps),
                "keyThemes": synthesis.items("themes")[:KEY_THEMES_LIMIT],
            },
        },
    )

    recommendations = None
    if quality_met:
        ctx.log("info", "Phase 12: Generating actionable recommendations and next steps")
        recommendations = ctx.task(
            recommendations_task,
            {
                "projectName": project_name,
                "insights": insights,
                "painPoints": synthesis.get("painPoints"),
                "opportunities": synthesis.get("opportunities"),
                "personas": personas,
                "journeyMaps": journey_maps,
                "outputDir": output_dir,
            },
        )
        artifacts.extend(recommendations.artifacts)

    end_time = ctx.now()

    return {
        "success": True,
        "projectName": project_name,
        "qualityScore": quality_score,
        "qualityMet": quality_met,
        "researchReport": report.get("reportPath"),
        "researchPlan": {
            "objectives": refined_objectives,
            "methods": [method_name(method) for method in selected_methods],
            "timeline": planning.get("estimatedTimeline"),
            "budget": planning.get("estimatedBudget"),
        },
        "participants": {
            "recruited": len(confirmed_participants),
            "target": participant_count,
            "diversity": recruitment.get("diversityScore"),
            "profiles": recruitment.get("participantProfiles"),
        },
        "research": {
            "qualitativeSessions": (
                qualitative_results[0].number("sessionCount") if qualitative_results else 0
            ),
            "quantitativeResponses": (
                quantitative_results[0].number("responseCount") if quantitative_results else 0
            ),
            "dataQuality": synthesis.get("dataQuality"),
        },
        "findings": {
            "themes": synthesis.items("themes"),
            "patterns": synthesis.items("patterns")[:FINDINGS_LIMIT],
            "painPoints": synthesis.items("painPoints")[:FINDINGS_LIMIT],
            "opportunities": synthesis.items("opportunities")[:FINDINGS_LIMIT],
        },
        "insights": {
            "total": len(insights),
            "criticalInsights": count_where(insights, "priority", "critical"),
            "insights": insights,
        },
        "personas": (
            {
                "total": len(personas),
                "personas": personas,
                "validationScore": persona_creation.get("validationScore"),
            }
            if persona_creation is not None
            else None
        ),
        "journeyMaps": (
            {"total": len(journey_maps), "maps": journey_maps}
            if journey_mapping is not None
            else None
        ),
        "recommendations": (
            {
                "total": len(recommendations.items("recommendations")),
                "prioritized": recommendations.get("prioritizedRecommendations"),
                "quickWins": recommendations.get("quickWins"),
                "longTermInitiatives": recommendations.get("longTermInitiatives"),
            }
            if recommendations is not None
            else None
        ),
        "artifacts": artifacts,
        "duration": elapsed_ms(start_time, end_time),
        "metadata": base_metadata(PROCESS_ID, start_time, outputDir=output_dir),
    }
