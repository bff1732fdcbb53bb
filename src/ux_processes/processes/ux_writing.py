"""UX writing and microcopy guidelines process.

@process ux-ui-design/ux-writing
@description UX Writing and Microcopy Guidelines - voice and tone definition, microcopy
patterns for common UI states, a consolidated microcopy catalog, accessibility and
localization guidance, with quality scoring of the final guidelines.
@inputs { projectName: string, brandGuidelines?: object, targetAudience?: array,
productType?: string, existingCopy?: array, contentGoals?: array, toneAttributes?: array,
userPersonas?: array, competitorExamples?: array, includeContentAudit?: boolean,
generateExamples?: boolean, targetQualityScore?: number }
@outputs { success: boolean, qualityScore: number, qualityMet: boolean, voiceAndTone: object,
microcopyCatalog: object, writingGuidelines: string, contentAuditReport: string,
artifacts: array }
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any

from ux_processes.processes._common import (
    artifact_files,
    base_metadata,
    dump_result,
    elapsed_ms,
    ensure_inputs,
    option,
)
from ux_processes.runtime.context import ProcessContext
from ux_processes.runtime.tasks import TaskRegistry

PROCESS_ID = "ux-ui-design/ux-writing"
TASKS = TaskRegistry(PROCESS_ID)

_PATTERN_OUTPUTS = {
    "patternCount": "number",
    "examples": "array",
    "documentPath": "string",
    "artifacts": "array",
}


def _pattern_task(name: str, *, title: str, agent: str, role: str, kind_key: str, subject: str):
    return TASKS.agent_task(
        name,
        title=title,
        agent=agent,
        role=role,
        task=f"Create reusable microcopy patterns for {subject}",
        instructions=[
            "Write in the defined voice and adjust tone to the context",
            "Give a template or formula for every pattern",
            "Provide before/after examples when examples are requested",
        ],
        outputs={kind_key: "array", **_PATTERN_OUTPUTS},
        labels=["agent", "ux-writing", "microcopy"],
    )


brand_audience_task = TASKS.agent_task(
    "brand-audience-analysis",
    title="Analyze brand, audience, and content landscape",
    agent="brand-content-analyst",
    role="content strategist and brand voice specialist",
    task="Analyze brand personality, audience characteristics and competitor copy",
    instructions=[
        "Extract brand personality traits from the guidelines",
        "Describe audience reading level, context and expectations",
        "Note what competitor copy does well and badly",
    ],
    outputs={
        "brandPersonality": "array",
        "audienceCharacteristics": "object",
        "keyInsights": "array",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "research"],
)

content_strategy_task = TASKS.agent_task(
    "content-strategy-definition",
    title="Define content strategy and goals",
    agent="content-strategist",
    role="senior content strategist",
    task="Define content goals, principles and quality criteria",
    instructions=["Tie every content goal to a user or business outcome"],
    outputs={
        "strategyGoals": "array",
        "contentPrinciples": "array",
        "qualityCriteria": "array",
        "documentPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "strategy"],
)

voice_tone_task = TASKS.agent_task(
    "voice-tone-definition",
    title="Define brand voice and tone guidelines",
    agent="voice-tone-designer",
    role="brand voice specialist and UX writer",
    task="Define voice attributes and tone modulations by context",
    instructions=[
        "Define 3-5 voice attributes with examples and counter-examples",
        "Define tone modulations for success, error, onboarding, empty and critical states",
        "Include a dos and don'ts list",
    ],
    outputs={
        "voiceAttributes": "array",
        "toneModulations": "number",
        "examplesCount": "number",
        "dosAndDontsCount": "number",
        "documentPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "voice-tone"],
)

error_message_task = _pattern_task(
    "error-message-patterns",
    title="Create error message patterns",
    agent="error-message-specialist",
    role="UX writer specializing in error messages and system feedback",
    kind_key="errorCategories",
    subject="error messages",
)

empty_state_task = _pattern_task(
    "empty-state-patterns",
    title="Create empty state patterns",
    agent="empty-state-specialist",
    role="UX writer specializing in empty states and motivational copy",
    kind_key="emptyStateTypes",
    subject="empty states",
)

button_label_task = _pattern_task(
    "button-label-patterns",
    title="Create button and CTA label patterns",
    agent="button-label-specialist",
    role="UX writer specializing in CTAs and action-oriented microcopy",
    kind_key="actionTypes",
    subject="buttons and calls to action",
)

onboarding_task = _pattern_task(
    "onboarding-copy-patterns",
    title="Create onboarding and instructional copy patterns",
    agent="onboarding-copy-specialist",
    role="UX writer specializing in onboarding and educational content",
    kind_key="onboardingElements",
    subject="onboarding and instructional copy",
)

form_microcopy_task = _pattern_task(
    "form-microcopy-patterns",
    title="Create form and input field microcopy patterns",
    agent="form-copy-specialist",
    role="UX writer specializing in forms and data entry",
    kind_key="formElements",
    subject="forms, labels, hints and validation messages",
)

confirmation_task = _pattern_task(
    "confirmation-message-patterns",
    title="Create confirmation and success message patterns",
    agent="confirmation-message-specialist",
    role="UX writer specializing in system feedback and confirmations",
    kind_key="confirmationTypes",
    subject="confirmations and success messages",
)

catalog_task = TASKS.agent_task(
    "microcopy-catalog",
    title="Consolidate comprehensive microcopy catalog",
    agent="microcopy-cataloger",
    role="content designer and information architect",
    task="Consolidate all microcopy patterns into one searchable catalog",
    instructions=["Organize patterns by category", "Remove duplicates and conflicts"],
    outputs={
        "totalPatterns": "number",
        "patternsByCategory": "object",
        "examplesCount": "number",
        "catalogPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "catalog"],
)

content_audit_task = TASKS.agent_task(
    "content-audit",
    title="Audit existing copy against new guidelines",
    agent="content-auditor",
    role="content strategist and UX writer",
    task="Audit the existing copy against the new voice and microcopy catalog",
    instructions=[
        "Flag copy that breaks voice, clarity or consistency",
        "Suggest rewrites for every flagged item",
    ],
    outputs={
        "itemsAudited": "number",
        "issuesFound": "number",
        "complianceScore": "number",
        "recommendations": "array",
        "reportPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "audit"],
)

best_practices_task = TASKS.agent_task(
    "writing-best-practices",
    title="Document writing process and best practices",
    agent="writing-process-specialist",
    role="senior UX writer and content operations expert",
    task="Document the writing workflow, review checklist and testing methods",
    instructions=["Describe how copy moves from draft to production"],
    outputs={
        "bestPracticesCount": "number",
        "workflow": "array",
        "reviewChecklist": "array",
        "documentPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "process"],
)

inclusive_language_task = TASKS.agent_task(
    "accessibility-inclusive-language",
    title="Create accessibility and inclusive language guidelines",
    agent="accessibility-language-specialist",
    role="accessibility expert and inclusive language consultant",
    task="Write plain language and inclusive terminology guidelines",
    instructions=[
        "Cover screen reader considerations for UI copy",
        "List terminology replacements",
    ],
    outputs={
        "guidelinesCount": "number",
        "plainLanguagePrinciples": "array",
        "inclusiveTerminology": "array",
        "documentPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "accessibility"],
)

localization_task = TASKS.agent_task(
    "localization-guidelines",
    title="Document localization and internationalization guidelines",
    agent="localization-specialist",
    role="localization expert and international content strategist",
    task="Document localization principles and string management rules",
    instructions=["Account for text expansion, pluralization and date formats"],
    outputs={
        "localizationPrinciples": "array",
        "stringManagementGuidelines": "array",
        "documentPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "localization"],
)

guidelines_document_task = TASKS.agent_task(
    "writing-guidelines-document",
    title="Generate comprehensive UX writing guidelines document",
    agent="guidelines-documentation-specialist",
    role="technical writer and content strategist",
    task="Assemble the master UX writing guidelines document",
    instructions=[
        "Open with an executive summary and a quick reference",
        "Link every section to its detailed document",
    ],
    outputs={
        "masterDocumentPath": "string",
        "executiveSummary": "string",
        "sectionsCompleted": "array",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "documentation"],
)

quality_task = TASKS.agent_task(
    "guidelines-quality-assessment",
    title="Assess guidelines quality and completeness",
    agent="guidelines-quality-assessor",
    role="principal UX writer and content quality auditor",
    task="Score the guidelines for completeness, usability and consistency",
    instructions=[
        "Weight voice and tone 20%, catalog 25%, best practices 15%, accessibility 15%, "
        "localization 10% and usability 15%",
        "Calculate a weighted overall score from 0 to 100",
    ],
    outputs={
        "overallScore": "number",
        "componentScores": "object",
        "completenessScore": "number",
        "usabilityScore": "number",
        "artifacts": "array",
    },
    labels=["agent", "ux-writing", "quality"],
)


def process(inputs: Mapping[str, Any], ctx: ProcessContext) -> dict[str, Any]:  # noqa: PLR0915
    inputs = ensure_inputs(inputs)
    project_name = option(inputs, "projectName", "Project")
    brand_guidelines = option(inputs, "brandGuidelines", {})
    target_audience = option(inputs, "targetAudience", [])
    product_type = option(inputs, "productType", "web-app")
    existing_copy = option(inputs, "existingCopy", [])
    content_goals = option(inputs, "contentGoals", [])
    tone_attributes = option(inputs, "toneAttributes", ["friendly", "helpful", "professional"])
    user_personas = option(inputs, "userPersonas", [])
    competitor_examples = option(inputs, "competitorExamples", [])
    output_dir = option(inputs, "outputDir", "ux-writing-output")
    include_content_audit = option(inputs, "includeContentAudit", True)
    generate_examples = option(inputs, "generateExamples", True)
    target_quality_score = option(inputs, "targetQualityScore", 85)

    start_time = ctx.now()
    artifacts: list[Any] = []

    ctx.log("info", f"Starting UX Writing and Microcopy Guidelines for {project_name}")

    ctx.log("info", "Phase 1: Analyzing brand, audience, and content landscape")
    brand_audience = ctx.task(
        brand_audience_task,
        {
            "projectName": project_name,
            "brandGuidelines": brand_guidelines,
            "targetAudience": target_audience,
            "userPersonas": user_personas,
            "competitorExamples": competitor_examples,
            "productType": product_type,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(brand_audience.artifacts)

    ctx.log("info", "Phase 2: Defining content strategy and goals")
    content_strategy = ctx.task(
        content_strategy_task,
        {
            "projectName": project_name,
            "brandAudienceAnalysis": brand_audience.to_dict(),
            "contentGoals": content_goals,
            "productType": product_type,
            "targetAudience": target_audience,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(content_strategy.artifacts)

    ctx.log("info", "Phase 3: Defining brand voice and tone guidelines")
    voice_and_tone = ctx.task(
        voice_tone_task,
        {
            "projectName": project_name,
            "brandGuidelines": brand_guidelines,
            "brandAudienceAnalysis": brand_audience.to_dict(),
            "toneAttributes": tone_attributes,
            "contentStrategy": content_strategy.to_dict(),
            "productType": product_type,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(voice_and_tone.artifacts)

    voice_attributes = voice_and_tone.items("voiceAttributes")
    tone_modulations = voice_and_tone.number("toneModulations")
    ctx.breakpoint(
        question=(
            f"Voice and tone defined: {', '.join(_attribute_names(voice_attributes))}. "
            f"{tone_modulations} tone modulations created. "
            "Review before creating microcopy patterns?"
        ),
        title="Voice and Tone Review",
        context={
            "runId": ctx.run_id,
            "files": artifact_files(
                [
                    *brand_audience.artifacts,
                    *content_strategy.artifacts,
                    *voice_and_tone.artifacts,
                ],
                limit=None,
                default_format="markdown",
                default_label="Voice & Tone",
            ),
            "summary": {
                "projectName": project_name,
                "voiceAttributes": voice_attributes,
                "toneModulations": tone_modulations,
                "examplesProvided": voice_and_tone.get("examplesCount"),
                "dosAndDonts": voice_and_tone.get("dosAndDontsCount"),
            },
        },
    )

    ctx.log("info", "Phase 4: Creating microcopy patterns for common UI elements")
    pattern_args = {
        "projectName": project_name,
        "voiceAndTone": voice_and_tone.to_dict(),
        "contentStrategy": content_strategy.to_dict(),
        "productType": product_type,
        "generateExamples": generate_examples,
        "outputDir": output_dir,
    }
    error_messages, empty_states, button_labels = ctx.parallel_all(
        [
            partial(ctx.task, error_message_task, pattern_args),
            partial(ctx.task, empty_state_task, pattern_args),
            partial(ctx.task, button_label_task, pattern_args),
        ],
    )
    artifacts.extend(error_messages.artifacts)
    artifacts.extend(empty_states.artifacts)
    artifacts.extend(button_labels.artifacts)

    ctx.log("info", "Phase 5: Creating onboarding and instructional copy patterns")
    onboarding_copy = ctx.task(onboarding_task, pattern_args)
    artifacts.extend(onboarding_copy.artifacts)

    ctx.log("info", "Phase 6: Creating form and input field microcopy patterns")
    form_microcopy = ctx.task(form_microcopy_task, pattern_args)
    artifacts.extend(form_microcopy.artifacts)

    ctx.log("info", "Phase 7: Creating confirmation and success message patterns")
    confirmation_messages = ctx.task(confirmation_task, pattern_args)
    artifacts.extend(confirmation_messages.artifacts)

    pattern_phases = {
        "errorPatterns": error_messages,
        "emptyStatePatterns": empty_states,
        "buttonLabelPatterns": button_labels,
        "onboardingPatterns": onboarding_copy,
        "formPatterns": form_microcopy,
        "confirmationPatterns": confirmation_messages,
    }
    pattern_counts = {key: phase.number("patternCount") for key, phase in pattern_phases.items()}
    ctx.breakpoint(
        question=(
            f"Microcopy patterns complete: {pattern_counts['errorPatterns']} error patterns, "
            f"{pattern_counts['emptyStatePatterns']} empty states, "
            f"{pattern_counts['buttonLabelPatterns']} button labels, "
            f"{pattern_counts['onboardingPatterns']} onboarding patterns, "
            f"{pattern_counts['formPatterns']} form patterns, "
            f"{pattern_counts['confirmationPatterns']} confirmation patterns. Review patterns?"
        ),
        title="Microcopy Patterns Review",
        context={
            "runId": ctx.run_id,
            "files": artifact_files(
                [artifact for phase in pattern_phases.values() for artifact in phase.artifacts],
                limit=None,
                default_format="markdown",
                default_label="Microcopy Pattern",
            ),
            "summary": {
                "projectName": project_name,
                "totalPatterns": sum(pattern_counts.values()),
                **pattern_counts,
                "examplesGenerated": generate_examples,
            },
        },
    )

    ctx.log("info", "Phase 8: Consolidating comprehensive microcopy catalog")
    microcopy_catalog = ctx.task(
        catalog_task,
        {
            "projectName": project_name,
            "voiceAndTone": voice_and_tone.to_dict(),
            "errorMessages": error_messages.to_dict(),
            "emptyStates": empty_states.to_dict(),
            "buttonLabels": button_labels.to_dict(),
            "onboardingCopy": onboarding_copy.to_dict(),
            "formMicrocopy": form_microcopy.to_dict(),
            "confirmationMessages": confirmation_messages.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(microcopy_catalog.artifacts)

    content_audit = None
    if include_content_audit and existing_copy:
        ctx.log("info", "Phase 9: Auditing existing copy against new guidelines")
        content_audit = ctx.task(
            content_audit_task,
            {
                "projectName": project_name,
                "existingCopy": existing_copy,
                "voiceAndTone": voice_and_tone.to_dict(),
                "microcopyCatalog": microcopy_catalog.to_dict(),
                "contentStrategy": content_strategy.to_dict(),
                "outputDir": output_dir,
            },
        )
        artifacts.extend(content_audit.artifacts)

    ctx.log("info", "Phase 10: Documenting writing process and best practices")
    best_practices = ctx.task(
        best_practices_task,
        {
            "projectName": project_name,
            "voiceAndTone": voice_and_tone.to_dict(),
            "microcopyCatalog": microcopy_catalog.to_dict(),
            "productType": product_type,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(best_practices.artifacts)

    ctx.log("info", "Phase 11: Creating accessibility and inclusive language guidelines")
    accessibility_guidelines = ctx.task(
        inclusive_language_task,
        {
            "projectName": project_name,
            "voiceAndTone": voice_and_tone.to_dict(),
            "targetAudience": target_audience,
            "productType": product_type,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(accessibility_guidelines.artifacts)

    ctx.log("info", "Phase 12: Documenting localization and internationalization guidelines")
    localization_guidelines = ctx.task(
        localization_task,
        {
            "projectName": project_name,
            "voiceAndTone": voice_and_tone.to_dict(),
            "microcopyCatalog": microcopy_catalog.to_dict(),
            "productType": product_type,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(localization_guidelines.artifacts)

    ctx.log("info", "Phase 13: Generating comprehensive UX writing guidelines document")
    writing_guidelines = ctx.task(
        guidelines_document_task,
        {
            "projectName": project_name,
            "brandAudienceAnalysis": brand_audience.to_dict(),
            "contentStrategy": content_strategy.to_dict(),
            "voiceAndTone": voice_and_tone.to_dict(),
            "microcopyCatalog": microcopy_catalog.to_dict(),
            "writingBestPractices": best_practices.to_dict(),
            "accessibilityGuidelines": accessibility_guidelines.to_dict(),
            "localizationGuidelines": localization_guidelines.to_dict(),
            "contentAudit": dump_result(content_audit),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(writing_guidelines.artifacts)

    ctx.log("info", "Phase 14: Assessing guidelines quality and completeness")
    quality = ctx.task(
        quality_task,
        {
            "projectName": project_name,
            "voiceAndTone": voice_and_tone.to_dict(),
            "microcopyCatalog": microcopy_catalog.to_dict(),
            "writingGuidelines": writing_guidelines.to_dict(),
            "contentAudit": dump_result(content_audit),
            "targetQualityScore": target_quality_score,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(quality.artifacts)

    quality_score = quality.number("overallScore")
    quality_met = quality_score >= target_quality_score

    verdict = (
        "Guidelines meet quality standards!"
        if quality_met
        else "Guidelines may benefit from refinement."
    )
    ctx.breakpoint(
        question=(
            f"UX Writing Guidelines complete! Quality score: {quality_score}/100. {verdict} "
            "Review and approve final deliverables?"
        ),
        title="UX Writing Guidelines Final Review",
        context={
            "runId": ctx.run_id,
            "files": artifact_files(artifacts, limit=None, default_format="markdown"),
            "summary": {
                "qualityScore": quality_score,
                "qualityMet": quality_met,
                "projectName": project_name,
                "productType": product_type,
                "totalArtifacts": len(artifacts),
                "deliverables": {
                    "voiceAttributes": len(voice_attributes),
                    "toneModulations": tone_modulations,
                    "totalMicrocopyPatterns": microcopy_catalog.get("totalPatterns"),
                    "contentAuditIssues": (
                        content_audit.number("issuesFound") if content_audit is not None else 0
                    ),
                    "bestPracticesCount": best_practices.get("bestPracticesCount"),
                    "accessibilityGuidelinesCount": accessibility_guidelines.get(
                        "guidelinesCount",
                    ),
                    "examplesProvided": microcopy_catalog.get("examplesCount"),
                },
                "qualityMetrics": {
                    "completenessScore": quality.get("completenessScore"),
                    "usabilityScore": quality.get("usabilityScore"),
                    "consistencyScore": quality.get("consistencyScore"),
                    "implementabilityScore": quality.get("implementabilityScore"),
                },
            },
        },
    )

    end_time = ctx.now()

    return {
        "success": True,
        "projectName": project_name,
        "productType": product_type,
        "qualityScore": quality_score,
        "qualityMet": quality_met,
        "voiceAndTone": {
            "voiceAttributes": voice_attributes,
            "toneModulations": tone_modulations,
            "documentPath": voice_and_tone.get("documentPath"),
            "examplesCount": voice_and_tone.get("examplesCount"),
        },
        "contentStrategy": {
            "goals": content_strategy.items("strategyGoals"),
            "principles": content_strategy.items("contentPrinciples"),
            "documentPath": content_strategy.get("documentPath"),
        },
        "microcopyCatalog": {
            "totalPatterns": microcopy_catalog.get("totalPatterns"),
            "patternsByCategory": microcopy_catalog.get("patternsByCategory"),
            "catalogPath": microcopy_catalog.get("catalogPath"),
            "examplesCount": microcopy_catalog.get("examplesCount"),
        },
        "writingGuidelines": writing_guidelines.get("masterDocumentPath"),
        "contentAuditReport": (
            content_audit.get("reportPath") if content_audit is not None else None
        ),
        "contentAuditResults": (
            {
                "itemsAudited": content_audit.get("itemsAudited"),
                "issuesFound": content_audit.get("issuesFound"),
                "complianceScore": content_audit.get("complianceScore"),
                "recommendationsCount": len(content_audit.items("recommendations")),
            }
            if content_audit is not None
            else None
        ),
        "artifacts": artifacts,
        "duration": elapsed_ms(start_time, end_time),
        "metadata": base_metadata(
            PROCESS_ID,
            start_time,
            projectName=project_name,
            productType=product_type,
            outputDir=output_dir,
            includeContentAudit=include_content_audit,
            generateExamples=generate_examples,
        ),
    }


def _attribute_names(attributes: list[Any]) -> list[str]:
    names = []
    for attribute in attributes:
        if isinstance(attribute, Mapping):
            names.append(str(attribute.get("attribute", "")))
        else:
            names.append(str(attribute))
    return names
