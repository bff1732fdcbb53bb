"""User persona development process.

@process specializations/ux-ui-design/persona-development
@description User Persona Development - research-backed user personas with behavioral patterns,
goals, pain points and user journey maps, validated against research data.
@inputs { projectName: string, productDomain: string, existingResearch?: object,
targetAudience?: array, researchBudget?: string, minimumValidationScore?: number,
personaCount?: number }
@outputs { success: boolean, personas: array, validationScore: number, validationPassed: boolean,
journeyMaps: array, artifacts: array }
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any

from ux_processes.processes._common import (
    artifact_files,
    base_metadata,
    elapsed_ms,
    ensure_inputs,
    option,
)
from ux_processes.runtime.context import ProcessContext
from ux_processes.runtime.tasks import TaskRegistry

PROCESS_ID = "specializations/ux-ui-design/persona-development"
PROCESS_VERSION = "1.0.0"
TASKS = TaskRegistry(PROCESS_ID)

RESEARCH_DEPTH_THRESHOLD = 60

_PERSONA_FIELDS = (
    "name",
    "role",
    "age",
    "quote",
    "goals",
    "painPoints",
    "behaviors",
    "techSavviness",
)

research_planning_task = TASKS.agent_task(
    "research-planning",
    title=lambda args: f"Research Planning - {args.get('projectName')}",
    agent="ux-researcher",
    role="Senior UX Researcher with expertise in user research methodologies and persona "
    "development",
    task="Plan the user research needed to build evidence-based personas",
    instructions=[
        "Review existing research and identify knowledge gaps",
        "Select research methods that fit the budget",
        "Define participant criteria for each target audience",
    ],
    outputs={
        "researchObjectives": "array",
        "researchMethods": "array",
        "participantCriteria": "object",
        "artifacts": "array",
    },
    labels=["agent", "ux-research", "planning"],
)

research_synthesis_task = TASKS.agent_task(
    "research-synthesis",
    title="Research Data Synthesis",
    agent="ux-researcher",
    role="UX Research Analyst with expertise in qualitative and quantitative data synthesis",
    task="Synthesize research data into insights and rate the research depth",
    instructions=[
        "Cluster observations with affinity mapping",
        "Rate research depth 0-100 by coverage and participant count",
    ],
    outputs={
        "researchDepthScore": "number",
        "participantCount": "integer",
        "researchMethods": "array",
        "keyInsights": "array",
        "artifacts": "array",
    },
    labels=["agent", "ux-research", "synthesis"],
)

segmentation_task = TASKS.agent_task(
    "user-segmentation",
    title="User Segmentation",
    agent="ux-strategist",
    role="UX Strategist with expertise in user segmentation and market analysis",
    task="Segment users into distinct groups that warrant their own persona",
    instructions=[
        "Segment by goals and behaviors rather than demographics alone",
        "Mark the primary segments the product must serve first",
    ],
    outputs={
        "segments": "array",
        "segmentationCriteria": "array",
        "primarySegments": "array",
        "artifacts": "array",
    },
    labels=["agent", "ux-strategy", "segmentation"],
)

persona_task = TASKS.agent_task(
    "persona-development",
    title=lambda args: f"Persona {args.get('segmentIndex')} Development",
    agent="persona-designer",
    role="UX Designer with expertise in persona creation and storytelling",
    task="Develop one detailed persona for the given user segment",
    instructions=[
        "Ground every attribute in the research synthesis",
        "Give the persona a name, role, age, a representative quote and tech savviness",
        "List goals, pain points and behaviors",
    ],
    outputs={"persona": "object", "artifacts": "array"},
    labels=["agent", "persona", "design"],
)

goals_task = TASKS.agent_task(
    "goals-analysis",
    title="Goals and Pain Points Analysis",
    agent="ux-analyst",
    role="UX Analyst with expertise in Jobs to Be Done framework and user needs analysis",
    task="Analyze persona goals and pain points",
    instructions=["Categorize goals", "Rank pain points by severity and frequency"],
    outputs={
        "totalGoals": "integer",
        "goalsByCategory": "object",
        "criticalPainPoints": "array",
        "artifacts": "array",
    },
    labels=["agent", "ux-analysis", "goals"],
)

behavioral_task = TASKS.agent_task(
    "behavioral-analysis",
    title="Behavioral Patterns and Usage Context",
    agent="behavioral-analyst",
    role="Behavioral UX Researcher with expertise in usage patterns and context analysis",
    task="Map behavioral patterns, usage contexts and device preferences",
    instructions=["Describe when, where and how each persona uses the product"],
    outputs={
        "identifiedPatterns": "array",
        "usageContexts": "array",
        "devicePreferences": "object",
        "artifacts": "array",
    },
    labels=["agent", "ux-research", "behavior"],
)

journey_mapping_task = TASKS.agent_task(
    "journey-mapping",
    title=lambda args: f"Journey Map - Persona {args.get('personaIndex')}",
    agent="journey-mapper",
    role="UX Designer specializing in user journey mapping and service design",
    task="Create an end-to-end journey map for one persona",
    instructions=[
        "Define stages with actions, thoughts and emotions",
        "Mark touchpoints and opportunity areas",
    ],
    outputs={"journeyMap": "object", "artifacts": "array"},
    labels=["agent", "journey-mapping"],
)

validation_task = TASKS.agent_task(
    "persona-validation",
    title="Persona Validation",
    agent="persona-validator",
    role="Senior UX Researcher with expertise in research validation and quality assurance",
    task="Validate personas against the research data and score them",
    instructions=[
        "Score research alignment and data support 0-100",
        "List gaps and recommendations",
    ],
    outputs={
        "overallValidationScore": "number",
        "researchAlignment": "number",
        "dataSupport": "number",
        "gaps": "array",
        "recommendations": "array",
        "artifacts": "array",
    },
    labels=["agent", "validation", "quality"],
)

empathy_map_task = TASKS.agent_task(
    "empathy-map-generation",
    title="Empathy Maps",
    agent="empathy-mapper",
    role="UX Designer with expertise in empathy mapping and emotional design",
    task="Create an empathy map (says, thinks, does, feels) for each persona",
    instructions=["One empathy map per persona"],
    outputs={"empathyMaps": "array", "artifacts": "array"},
    labels=["agent", "empathy-mapping"],
)

documentation_task = TASKS.agent_task(
    "persona-documentation",
    title="Persona Documentation",
    agent="persona-documenter",
    role="UX Writer and Documentation Specialist",
    task="Produce the persona documentation package and persona posters",
    instructions=[
        "Write an executive summary",
        "Produce one poster per persona",
        "Choose distribution formats for stakeholders",
    ],
    outputs={
        "documentPath": "string",
        "executiveSummary": "string",
        "personaPosters": "array",
        "distributionFormat": "array",
        "artifacts": "array",
    },
    labels=["agent", "documentation"],
)


def process(inputs: Mapping[str, Any], ctx: ProcessContext) -> dict[str, Any]:  # noqa: PLR0915
    inputs = ensure_inputs(inputs)
    project_name = option(inputs, "projectName")
    product_domain = option(inputs, "productDomain")
    existing_research = option(inputs, "existingResearch", {})
    target_audience = option(inputs, "targetAudience", [])
    research_budget = option(inputs, "researchBudget", "medium")
    output_dir = option(inputs, "outputDir", "persona-development-output")
    minimum_validation_score = option(inputs, "minimumValidationScore", 80)
    persona_count = int(option(inputs, "personaCount", 4))

    start_time = ctx.now()
    artifacts: list[Any] = []

    ctx.log("info", f"Starting User Persona Development for {project_name}")

    ctx.log("info", "Phase 1: Planning user research approach")
    research_plan = ctx.task(
        research_planning_task,
        {
            "projectName": project_name,
            "productDomain": product_domain,
            "existingResearch": existing_research,
            "targetAudience": target_audience,
            "researchBudget": research_budget,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(research_plan.artifacts)

    ctx.log("info", "Phase 2: Synthesizing user research data")
    research_synthesis = ctx.task(
        research_synthesis_task,
        {
            "projectName": project_name,
            "productDomain": product_domain,
            "researchPlan": research_plan.to_dict(),
            "existingResearch": existing_research,
            "targetAudience": target_audience,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(research_synthesis.artifacts)

    research_depth = research_synthesis.number("researchDepthScore")
    if research_depth < RESEARCH_DEPTH_THRESHOLD:
        ctx.breakpoint(
            question=(
                f"Research depth score is {research_depth}/100 (below threshold of "
                f"{RESEARCH_DEPTH_THRESHOLD}). Should we proceed with additional research or "
                "continue with current insights?"
            ),
            title="Research Depth Warning",
            context={
                "runId": ctx.run_id,
                "researchSynthesis": research_synthesis.to_dict(),
                "recommendation": (
                    "Consider conducting additional user interviews or surveys before proceeding"
                ),
            },
        )

    ctx.log("info", "Phase 3: Segmenting users into distinct groups")
    segmentation = ctx.task(
        segmentation_task,
        {
            "projectName": project_name,
            "researchSynthesis": research_synthesis.to_dict(),
            "targetAudience": target_audience,
            "personaCount": persona_count,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(segmentation.artifacts)
    segments = segmentation.items("segments")

    ctx.log("info", "Phase 4: Developing detailed user personas")
    persona_results = ctx.parallel_all(
        [
            partial(
                ctx.task,
                persona_task,
                {
                    "projectName": project_name,
                    "segmentIndex": index,
                    "segment": segment,
                    "researchSynthesis": research_synthesis.to_dict(),
                    "productDomain": product_domain,
                    "outputDir": output_dir,
                },
            )
            for index, segment in enumerate(segments[:persona_count], start=1)
        ],
    )
    personas = [result.mapping("persona") for result in persona_results]
    for result in persona_results:
        artifacts.extend(result.artifacts)

    ctx.breakpoint(
        question=(
            f"{len(personas)} personas developed for {project_name}. "
            "Review personas before validation?"
        ),
        title="Persona Review",
        context={
            "runId": ctx.run_id,
            "files": artifact_files(artifacts, limit=None, default_format="markdown"),
            "summary": {
                "projectName": project_name,
                "personaCount": len(personas),
                "segments": len(segments),
                "researchDepth": research_depth,
            },
        },
    )

    ctx.log("info", "Phase 5: Analyzing user goals and pain points")
    goals_analysis = ctx.task(
        goals_task,
        {
            "projectName": project_name,
            "personas": personas,
            "researchSynthesis": research_synthesis.to_dict(),
            "productDomain": product_domain,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(goals_analysis.artifacts)

    ctx.log("info", "Phase 6: Mapping behavioral patterns and usage context")
    behavioral_analysis = ctx.task(
        behavioral_task,
        {
            "projectName": project_name,
            "personas": personas,
            "researchSynthesis": research_synthesis.to_dict(),
            "goalsAnalysis": goals_analysis.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(behavioral_analysis.artifacts)

    ctx.log("info", "Phase 7: Creating user journey maps for each persona")
    journey_results = ctx.parallel_all(
        [
            partial(
                ctx.task,
                journey_mapping_task,
                {
                    "projectName": project_name,
                    "persona": persona,
                    "personaIndex": index,
                    "goalsAnalysis": goals_analysis.to_dict(),
                    "behavioralAnalysis": behavioral_analysis.to_dict(),
                    "productDomain": product_domain,
                    "outputDir": output_dir,
                },
            )
            for index, persona in enumerate(personas, start=1)
        ],
    )
    journey_maps = [result.mapping("journeyMap") for result in journey_results]
    for result in journey_results:
        artifacts.extend(result.artifacts)

    ctx.log("info", "Phase 8: Validating personas against research data")
    validation = ctx.task(
        validation_task,
        {
            "projectName": project_name,
            "personas": personas,
            "researchSynthesis": research_synthesis.to_dict(),
            "goalsAnalysis": goals_analysis.to_dict(),
            "behavioralAnalysis": behavioral_analysis.to_dict(),
            "journeyMaps": journey_maps,
            "minimumValidationScore": minimum_validation_score,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(validation.artifacts)
    validation_score = validation.number("overallValidationScore")
    validation_passed = validation_score >= minimum_validation_score

    ctx.log("info", "Phase 9: Creating empathy maps for personas")
    empathy_maps = ctx.task(
        empathy_map_task,
        {
            "projectName": project_name,
            "personas": personas,
            "researchSynthesis": research_synthesis.to_dict(),
            "behavioralAnalysis": behavioral_analysis.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(empathy_maps.artifacts)

    ctx.log("info", "Phase 10: Generating comprehensive persona documentation")
    documentation = ctx.task(
        documentation_task,
        {
            "projectName": project_name,
            "productDomain": product_domain,
            "personas": personas,
            "researchSynthesis": research_synthesis.to_dict(),
            "userSegmentation": segmentation.to_dict(),
            "goalsAnalysis": goals_analysis.to_dict(),
            "behavioralAnalysis": behavioral_analysis.to_dict(),
            "journeyMaps": journey_maps,
            "empathyMaps": empathy_maps.to_dict(),
            "validation": validation.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(documentation.artifacts)

    verdict = (
        "Personas meet quality standards!" if validation_passed else "Personas may need refinement."
    )
    ctx.breakpoint(
        question=(
            f"User Persona Development complete for {project_name}. Validation Score: "
            f"{validation_score}/100. {verdict} Approve and distribute?"
        ),
        title="Persona Documentation Approval",
        context={
            "runId": ctx.run_id,
            "files": artifact_files(artifacts, limit=None, default_format="markdown"),
            "summary": {
                "projectName": project_name,
                "validationScore": validation_score,
                "validationPassed": validation_passed,
                "totalPersonas": len(personas),
                "totalArtifacts": len(artifacts),
                "researchDepth": research_depth,
                "journeyMapCount": len(journey_maps),
            },
        },
    )

    end_time = ctx.now()

    return {
        "success": True,
        "projectName": project_name,
        "validationScore": validation_score,
        "validationPassed": validation_passed,
        "personas": [
            {field: persona.get(field) for field in _PERSONA_FIELDS} for persona in personas
        ],
        "researchSynthesis": {
            "researchDepth": research_depth,
            "participantCount": research_synthesis.get("participantCount"),
            "researchMethods": research_synthesis.items("researchMethods"),
            "keyInsights": research_synthesis.items("keyInsights"),
        },
        "segmentation": {
            "totalSegments": len(segments),
            "segmentationCriteria": segmentation.items("segmentationCriteria"),
            "primarySegments": segmentation.items("primarySegments"),
        },
        "goalsAnalysis": {
            "totalGoals": goals_analysis.get("totalGoals"),
            "goalsByCategory": goals_analysis.get("goalsByCategory"),
            "criticalPainPoints": goals_analysis.items("criticalPainPoints"),
        },
        "behavioralPatterns": {
            "identifiedPatterns": behavioral_analysis.items("identifiedPatterns"),
            "usageContexts": behavioral_analysis.items("usageContexts"),
            "devicePreferences": behavioral_analysis.get("devicePreferences"),
        },
        "journeyMaps": [
            {
                "personaName": journey_map.get("personaName"),
                "stages": journey_map.get("stages"),
                "touchpoints": journey_map.get("touchpoints"),
                "opportunityAreas": journey_map.get("opportunityAreas"),
            }
            for journey_map in journey_maps
        ],
        "validation": {
            "researchAlignment": validation.get("researchAlignment"),
            "dataSupport": validation.get("dataSupport"),
            "gaps": validation.items("gaps"),
            "recommendations": validation.items("recommendations"),
        },
        "documentation": {
            "documentPath": documentation.get("documentPath"),
            "personaPosters": documentation.items("personaPosters"),
            "distributionFormat": documentation.get("distributionFormat"),
        },
        "artifacts": artifacts,
        "duration": elapsed_ms(start_time, end_time),
        "metadata": base_metadata(
            PROCESS_ID,
            start_time,
            version=PROCESS_VERSION,
            projectName=project_name,
            productDomain=product_domain,
            outputDir=output_dir,
        ),
    }
