"""Accessibility audit and remediation process.

@process specializations/ux-ui-design/accessibility-audit
@description Accessibility Audit and Remediation - comprehensive accessibility evaluation with
WCAG compliance assessment, barrier identification, inclusive design recommendations and an
actionable remediation roadmap.
@inputs { projectName: string, productUrl: string, wcagLevel?: string, scope?: array,
userPersonas?: array, assistiveTechnologies?: array, includeRemediation?: boolean,
includeUsabilityTesting?: boolean, performAutomatedScanning?: boolean,
performManualTesting?: boolean, generateVPAT?: boolean }
@outputs { success: boolean, complianceLevel: string, complianceScore: number,
meetsCompliance: boolean, barriers: object, recommendations: object, assessmentResults: object,
remediationPlan: object, usabilityReport: object, vpatReport: object, artifacts: array }
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any

from ux_processes.processes._common import (
    artifact_files,
    base_metadata,
    count_where,
    dump_result,
    dump_results,
    elapsed_ms,
    ensure_inputs,
    file_ref,
    option,
)
from ux_processes.runtime.context import ProcessContext
from ux_processes.runtime.tasks import PhaseResult, TaskRegistry

PROCESS_ID = "specializations/ux-ui-design/accessibility-audit"
TASKS = TaskRegistry(PROCESS_ID)

_AGENT = "general-purpose"
_ROLE = "Senior Accessibility Specialist"
_SEVERITIES = ("critical", "high", "medium", "low")
_FINDINGS = {"barriers": "array", "recommendations": "array", "artifacts": "array"}

planning_task = TASKS.agent_task(
    "accessibility-audit-planning",
    title=lambda args: f"Phase 1: Accessibility Audit Planning - {args.get('projectName')}",
    agent=_AGENT,
    role="Senior Accessibility Consultant and UX Researcher",
    task="Plan comprehensive accessibility audit with scope definition, methodology, "
    "and success criteria",
    instructions=[
        "Define the pages, flows and components in scope",
        "Map user personas to assistive technologies to test with",
        "Choose automated, manual and assistive technology testing methods",
        "State measurable success criteria for the target WCAG level",
    ],
    outputs={
        "scopeItems": "array",
        "userPersonas": "array",
        "methodology": "object",
        "successCriteria": "array",
        "artifacts": "array",
    },
    labels=["agent", "accessibility", "planning"],
)

wcag_review_task = TASKS.agent_task(
    "wcag-compliance-review",
    title=lambda args: f"Phase 2: WCAG {args.get('wcagLevel')} Compliance Review",
    agent=_AGENT,
    role="WCAG Compliance Expert",
    task="Identify applicable WCAG success criteria and build the compliance checklist",
    instructions=[
        "List every success criterion applicable at the target level",
        "Group criteria by perceivable, operable, understandable and robust",
        "Note criteria added by each compliance standard",
    ],
    outputs={
        "applicableCriteria": "array",
        "complianceChecklist": "array",
        "recommendations": "array",
        "artifacts": "array",
    },
    labels=["agent", "accessibility", "wcag"],
)

automated_scan_task = TASKS.agent_task(
    "automated-accessibility-scan",
    title=lambda args: f"Automated Scan - {args.get('pageOrFlow')}",
    agent=_AGENT,
    role="Accessibility Testing Engineer",
    task="Run automated accessibility scanning on one page or flow",
    instructions=[
        "Scan the page or flow with automated checkers (axe, WAVE, Lighthouse)",
        "Record each barrier with WCAG criterion, severity, element and location",
        "Flag likely false positives for manual verification",
    ],
    outputs={"barriers": "array", "scanSummary": "object", "artifacts": "array"},
    labels=["agent", "accessibility", "automated-testing"],
)

manual_testing_task = TASKS.agent_task(
    "manual-accessibility-testing",
    title="Phase 4: Manual Accessibility Testing",
    agent=_AGENT,
    role="Accessibility Tester and Assistive Technology Specialist",
    task="Manually test the scope for barriers automated tools cannot detect",
    instructions=[
        "Verify automated findings and remove false positives",
        "Test meaningful sequence, alternative text quality and focus order",
        "Record additional barriers with severity and WCAG criterion",
    ],
    outputs=_FINDINGS,
    labels=["agent", "accessibility", "manual-testing"],
)

keyboard_task = TASKS.agent_task(
    "keyboard-navigation-assessment",
    title="Phase 5: Keyboard Navigation Assessment",
    agent=_AGENT,
    role=_ROLE,
    task="Assess keyboard navigation, focus management and keyboard traps",
    instructions=[
        "Tab through every flow and record focus order issues",
        "Check visible focus indicators and skip links",
        "Identify keyboard traps and inaccessible custom widgets",
    ],
    outputs={"score": "number", "status": "string", **_FINDINGS},
    labels=["agent", "accessibility", "keyboard"],
)

screen_reader_task = TASKS.agent_task(
    "screen-reader-compatibility",
    title="Phase 6: Screen Reader Compatibility",
    agent=_AGENT,
    role=_ROLE,
    task="Evaluate screen reader compatibility across the assistive technologies in scope",
    instructions=[
        "Test landmarks, headings, labels and live regions",
        "Check ARIA usage against the authoring practices",
        "Record which assistive technologies were tested",
    ],
    outputs={"compatible": "boolean", "testedTechnologies": "array", **_FINDINGS},
    labels=["agent", "accessibility", "screen-reader"],
)

color_contrast_task = TASKS.agent_task(
    "color-contrast-visual-analysis",
    title="Phase 7: Color Contrast and Visual Design Analysis",
    agent=_AGENT,
    role=_ROLE,
    task="Analyze color contrast, use of color and visual design accessibility",
    instructions=[
        "Measure text and non-text contrast ratios",
        "Check information conveyed by color alone",
        "Test reflow, text spacing and zoom to 200%",
    ],
    outputs={
        "score": "number",
        "contrastIssues": "array",
        "designIssues": "array",
        **_FINDINGS,
    },
    labels=["agent", "accessibility", "visual"],
)

cognitive_task = TASKS.agent_task(
    "content-cognitive-accessibility",
    title="Phase 8: Content and Cognitive Accessibility Review",
    agent=_AGENT,
    role=_ROLE,
    task="Review content clarity, readability and cognitive load",
    instructions=[
        "Assess reading level, plain language and consistent navigation",
        "Check error prevention and timing requirements",
    ],
    outputs={"score": "number", **_FINDINGS},
    labels=["agent", "accessibility", "cognitive"],
)

forms_task = TASKS.agent_task(
    "forms-interactive-elements",
    title="Phase 9: Forms and Interactive Elements Assessment",
    agent=_AGENT,
    role=_ROLE,
    task="Assess accessibility of forms, controls and interactive components",
    instructions=[
        "Check labels, instructions, error identification and suggestions",
        "Verify names, roles and states of custom controls",
    ],
    outputs={"accessible": "boolean", **_FINDINGS},
    labels=["agent", "accessibility", "forms"],
)

multimedia_task = TASKS.agent_task(
    "multimedia-accessibility",
    title="Phase 10: Multimedia Accessibility Evaluation",
    agent=_AGENT,
    role=_ROLE,
    task="Evaluate captions, transcripts, audio description and media controls",
    instructions=[
        "Check captions and transcripts for prerecorded and live media",
        "Verify autoplay, pause controls and flashing content thresholds",
    ],
    outputs={"accessible": "boolean", **_FINDINGS},
    labels=["agent", "accessibility", "multimedia"],
)

prioritization_task = TASKS.agent_task(
    "barrier-analysis-prioritization",
    title="Phase 11: Barrier Analysis and Prioritization",
    agent=_AGENT,
    role="Accessibility Program Lead",
    task="Deduplicate, analyze and prioritize barriers and compute the compliance score",
    instructions=[
        "Merge duplicate barriers reported by different phases",
        "Assign severity critical, high, medium or low by user impact",
        "Compute a 0-100 compliance score and the achieved conformance level",
    ],
    outputs={
        "complianceScore": "number",
        "complianceLevel": "string",
        "prioritizedBarriers": "array",
        "reportPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "accessibility", "prioritization"],
)

at_usability_task = TASKS.agent_task(
    "assistive-technology-usability",
    title="Phase 12: Assistive Technology Usability Testing",
    agent=_AGENT,
    role="Inclusive UX Researcher",
    task="Plan and report usability testing with assistive technology users",
    instructions=[
        "Recruit participants matching the user personas",
        "Measure task success rates per assistive technology",
    ],
    outputs={
        "participantCount": "integer",
        "successRate": "number",
        "keyFindings": "array",
        "recommendations": "array",
        "reportPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "accessibility", "usability-testing"],
)

inclusive_design_task = TASKS.agent_task(
    "inclusive-design-recommendations",
    title="Phase 13: Inclusive Design Recommendations",
    agent=_AGENT,
    role="Inclusive Design Lead",
    task="Turn audit findings into inclusive design recommendations and patterns",
    instructions=[
        "Recommend design patterns that remove whole classes of barriers",
        "Tie every recommendation to the personas it helps",
    ],
    outputs={"recommendations": "array", "designPatterns": "array", "artifacts": "array"},
    labels=["agent", "accessibility", "inclusive-design"],
)

audit_report_task = TASKS.agent_task(
    "comprehensive-audit-report",
    title="Phase 14: Comprehensive Accessibility Audit Report",
    agent=_AGENT,
    role="Accessibility Consultant and Technical Writer",
    task="Write the full audit report and the executive summary",
    instructions=[
        "Summarize compliance status, key barriers and recommendations",
        "Include per-assessment findings with evidence",
    ],
    outputs={"mainReportPath": "string", "executiveSummaryPath": "string", "artifacts": "array"},
    labels=["agent", "accessibility", "reporting"],
)

vpat_task = TASKS.agent_task(
    "vpat-generation",
    title="Phase 15: VPAT Generation",
    agent=_AGENT,
    role="Accessibility Compliance Specialist",
    task="Produce a Voluntary Product Accessibility Template for the product",
    instructions=["Fill conformance levels and remarks for every applicable criterion"],
    outputs={"vpatPath": "string", "complianceSummary": "object", "artifacts": "array"},
    labels=["agent", "accessibility", "vpat"],
)

remediation_task = TASKS.agent_task(
    "remediation-plan-creation",
    title="Phase 16: Remediation Plan Creation",
    agent=_AGENT,
    role="Accessibility Remediation Planner",
    task="Create a phased, actionable remediation plan and roadmap",
    instructions=[
        "Group fixes into phases ordered by severity and effort",
        "Identify quick wins",
        "Estimate effort and the expected compliance score improvement",
    ],
    outputs={
        "totalTasks": "integer",
        "phases": "array",
        "estimatedEffort": "string",
        "expectedImprovementScore": "number",
        "quickWins": "array",
        "criticalBarriers": "integer",
        "highPriorityBarriers": "integer",
        "planPath": "string",
        "roadmapPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "accessibility", "remediation"],
)

governance_task = TASKS.agent_task(
    "accessibility-governance",
    title="Phase 17: Accessibility Governance Recommendations",
    agent=_AGENT,
    role="Accessibility Program Manager",
    task="Recommend governance, training and monitoring to keep the product accessible",
    instructions=["Cover ownership, design system checks, CI testing and regular audits"],
    outputs={"recommendations": "array", "artifacts": "array"},
    labels=["agent", "accessibility", "governance"],
)

final_assessment_task = TASKS.agent_task(
    "final-accessibility-assessment",
    title="Phase 18: Final Accessibility Assessment",
    agent=_AGENT,
    role="Principal Accessibility Consultant",
    task="Give the final verdict on accessibility readiness",
    instructions=[
        "State the verdict and readiness level",
        "List strengths, concerns, critical concerns and next steps",
    ],
    outputs={
        "verdict": "string",
        "readinessLevel": "string",
        "recommendation": "string",
        "strengths": "array",
        "concerns": "array",
        "criticalConcerns": "array",
        "nextSteps": "array",
        "reportPath": "string",
        "artifacts": "array",
    },
    labels=["agent", "accessibility", "assessment"],
)


def meets_compliance(target_level: str, achieved_level: str) -> bool:
    """Achieved conformance satisfies the target level."""

    if achieved_level == target_level:
        return True
    if target_level == "AA":
        return achieved_level == "AAA"
    if target_level == "A":
        return achieved_level in {"AA", "AAA"}
    return False


def process(inputs: Mapping[str, Any], ctx: ProcessContext) -> dict[str, Any]:  # noqa: C901, PLR0915
    inputs = ensure_inputs(inputs)
    project_name = option(inputs, "projectName")
    product_url = option(inputs, "productUrl")
    wcag_level = option(inputs, "wcagLevel", "AA")
    scope = option(inputs, "scope", [])
    user_personas = option(inputs, "userPersonas", [])
    assistive_technologies = option(inputs, "assistiveTechnologies", ["NVDA", "JAWS", "VoiceOver"])
    include_remediation = option(inputs, "includeRemediation", True)
    include_usability_testing = option(inputs, "includeUsabilityTesting", False)
    compliance_standards = option(inputs, "complianceStandards", ["WCAG 2.1", "WCAG 2.2"])
    output_dir = option(inputs, "outputDir", "accessibility-audit-output")
    perform_automated_scanning = option(inputs, "performAutomatedScanning", True)
    perform_manual_testing = option(inputs, "performManualTesting", True)
    perform_usability_testing = option(inputs, "performUsabilityTesting", False)
    generate_vpat = option(inputs, "generateVPAT", False)
    prioritize_by_impact = option(inputs, "prioritizeByImpact", True)

    start_time = ctx.now()
    artifacts: list[Any] = []
    barriers: list[Any] = []
    recommendations: list[Any] = []

    def absorb(result: PhaseResult) -> PhaseResult:
        barriers.extend(result.items("barriers"))
        recommendations.extend(result.items("recommendations"))
        artifacts.extend(result.artifacts)
        return result

    ctx.log("info", f"Starting Accessibility Audit and Remediation: {project_name}")
    ctx.log(
        "info",
        f"Target: {product_url}, WCAG Level: {wcag_level}, Scope: {len(scope)} pages/flows",
    )

    ctx.log("info", "Phase 1: Planning comprehensive accessibility audit")
    audit_plan = ctx.task(
        planning_task,
        {
            "projectName": project_name,
            "productUrl": product_url,
            "wcagLevel": wcag_level,
            "scope": scope,
            "userPersonas": user_personas,
            "assistiveTechnologies": assistive_technologies,
            "complianceStandards": compliance_standards,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(audit_plan.artifacts)

    ctx.log("info", "Phase 2: Reviewing WCAG compliance standards and success criteria")
    compliance_review = ctx.task(
        wcag_review_task,
        {
            "projectName": project_name,
            "wcagLevel": wcag_level,
            "complianceStandards": compliance_standards,
            "scope": scope,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(compliance_review.artifacts)
    recommendations.extend(compliance_review.items("recommendations"))

    automated_results: list[PhaseResult] | None = None
    if perform_automated_scanning:
        ctx.log("info", "Phase 3: Running automated accessibility scans")
        automated_results = ctx.parallel_all(
            [
                partial(
                    ctx.task,
                    automated_scan_task,
                    {
                        "projectName": project_name,
                        "productUrl": product_url,
                        "pageOrFlow": page_or_flow,
                        "wcagLevel": wcag_level,
                        "complianceReview": compliance_review.to_dict(),
                        "outputDir": output_dir,
                    },
                )
                for page_or_flow in scope
            ],
        )
        for scan in automated_results:
            barriers.extend(scan.items("barriers"))
            artifacts.extend(scan.artifacts)
        ctx.log(
            "info",
            f"Automated scanning complete: {len(barriers)} potential barriers identified",
        )

    manual_results: PhaseResult | None = None
    if perform_manual_testing:
        ctx.log("info", "Phase 4: Conducting manual accessibility testing")
        manual_results = absorb(
            ctx.task(
                manual_testing_task,
                {
                    "projectName": project_name,
                    "productUrl": product_url,
                    "scope": scope,
                    "wcagLevel": wcag_level,
                    "complianceReview": compliance_review.to_dict(),
                    "automatedScanResults": dump_results(automated_results),
                    "assistiveTechnologies": assistive_technologies,
                    "outputDir": output_dir,
                },
            ),
        )
        ctx.log(
            "info",
            f"Manual testing complete: {len(manual_results.items('barriers'))} "
            "additional barriers identified",
        )

    automated_barrier_count = sum(len(scan.items("barriers")) for scan in automated_results or [])
    ctx.breakpoint(
        question=(
            f"Initial accessibility audit complete. {len(barriers)} total barriers identified. "
            "Review findings and approve to continue with barrier analysis and prioritization?"
        ),
        title="Initial Audit Findings Review",
        context={
            "runId": ctx.run_id,
            "summary": {
                "projectName": project_name,
                "totalBarriers": len(barriers),
                "automatedBarriers": automated_barrier_count,
                "manualBarriers": len(manual_results.items("barriers")) if manual_results else 0,
                "scope": len(scope),
            },
            "files": artifact_files(artifacts),
        },
    )

    common_args = {
        "projectName": project_name,
        "productUrl": product_url,
        "scope": scope,
        "outputDir": output_dir,
    }

    ctx.log("info", "Phase 5: Assessing keyboard navigation and focus management")
    keyboard = absorb(ctx.task(keyboard_task, dict(common_args)))

    ctx.log("info", "Phase 6: Evaluating screen reader compatibility")
    screen_reader = absorb(
        ctx.task(
            screen_reader_task,
            {
                **common_args,
                "assistiveTechnologies": assistive_technologies,
                "automatedScanResults": dump_results(automated_results),
            },
        ),
    )

    ctx.log("info", "Phase 7: Analyzing color contrast and visual design accessibility")
    visual = absorb(ctx.task(color_contrast_task, {**common_args, "wcagLevel": wcag_level}))

    ctx.log("info", "Phase 8: Reviewing content clarity and cognitive accessibility")
    cognitive = absorb(ctx.task(cognitive_task, {**common_args, "wcagLevel": wcag_level}))

    ctx.log("info", "Phase 9: Assessing forms and interactive elements accessibility")
    forms = absorb(ctx.task(forms_task, {**common_args, "wcagLevel": wcag_level}))

    ctx.log("info", "Phase 10: Evaluating multimedia and rich media accessibility")
    multimedia = absorb(ctx.task(multimedia_task, {**common_args, "wcagLevel": wcag_level}))

    ctx.log("info", "Phase 11: Analyzing and prioritizing accessibility barriers")
    barrier_analysis = ctx.task(
        prioritization_task,
        {
            "projectName": project_name,
            "barriers": list(barriers),
            "wcagLevel": wcag_level,
            "userPersonas": user_personas,
            "prioritizeByImpact": prioritize_by_impact,
            "outputDir": output_dir,
        },
    )
    prioritized_barriers = barrier_analysis.items("prioritizedBarriers")
    compliance_score = barrier_analysis.number("complianceScore")
    achieved_level = barrier_analysis.text("complianceLevel")
    artifacts.extend(barrier_analysis.artifacts)
    ctx.log(
        "info",
        f"Barrier analysis complete: Compliance score {compliance_score}/100, "
        f"Level: {achieved_level}",
    )

    usability_report: PhaseResult | None = None
    if include_usability_testing or perform_usability_testing:
        ctx.log("info", "Phase 12: Conducting usability testing with assistive technologies")
        usability_report = ctx.task(
            at_usability_task,
            {
                **common_args,
                "userPersonas": user_personas,
                "assistiveTechnologies": assistive_technologies,
                "prioritizedBarriers": prioritized_barriers,
            },
        )
        recommendations.extend(usability_report.items("recommendations"))
        artifacts.extend(usability_report.artifacts)

    ctx.log("info", "Phase 13: Generating inclusive design recommendations")
    inclusive_design = ctx.task(
        inclusive_design_task,
        {
            "projectName": project_name,
            "prioritizedBarriers": prioritized_barriers,
            "userPersonas": user_personas,
            "keyboardAssessment": keyboard.to_dict(),
            "screenReaderEvaluation": screen_reader.to_dict(),
            "visualDesignAnalysis": visual.to_dict(),
            "cognitiveReview": cognitive.to_dict(),
            "usabilityReport": dump_result(usability_report),
            "outputDir": output_dir,
        },
    )
    recommendations.extend(inclusive_design.items("recommendations"))
    artifacts.extend(inclusive_design.artifacts)

    ctx.log("info", "Phase 14: Generating comprehensive accessibility audit report")
    audit_report = ctx.task(
        audit_report_task,
        {
            "projectName": project_name,
            "productUrl": product_url,
            "wcagLevel": wcag_level,
            "complianceScore": compliance_score,
            "achievedComplianceLevel": achieved_level,
            "complianceStandards": compliance_standards,
            "scope": scope,
            "barriers": list(barriers),
            "prioritizedBarriers": prioritized_barriers,
            "recommendations": list(recommendations),
            "keyboardAssessment": keyboard.to_dict(),
            "screenReaderEvaluation": screen_reader.to_dict(),
            "visualDesignAnalysis": visual.to_dict(),
            "cognitiveReview": cognitive.to_dict(),
            "formsAssessment": forms.to_dict(),
            "multimediaEvaluation": multimedia.to_dict(),
            "usabilityReport": dump_result(usability_report),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(audit_report.artifacts)

    vpat_report: PhaseResult | None = None
    if generate_vpat:
        ctx.log("info", "Phase 15: Generating VPAT (Voluntary Product Accessibility Template)")
        vpat_report = ctx.task(
            vpat_task,
            {
                "projectName": project_name,
                "productUrl": product_url,
                "wcagLevel": wcag_level,
                "complianceScore": compliance_score,
                "achievedComplianceLevel": achieved_level,
                "complianceReview": compliance_review.to_dict(),
                "prioritizedBarriers": prioritized_barriers,
                "outputDir": output_dir,
            },
        )
        artifacts.extend(vpat_report.artifacts)

    remediation_plan: PhaseResult | None = None
    if include_remediation:
        ctx.log("info", "Phase 16: Creating actionable remediation plan")
        remediation_plan = ctx.task(
            remediation_task,
            {
                "projectName": project_name,
                "prioritizedBarriers": prioritized_barriers,
                "recommendations": list(recommendations),
                "inclusiveDesignRecs": inclusive_design.to_dict(),
                "wcagLevel": wcag_level,
                "complianceScore": compliance_score,
                "achievedComplianceLevel": achieved_level,
                "outputDir": output_dir,
            },
        )
        artifacts.extend(remediation_plan.artifacts)
        phases = remediation_plan.items("phases")
        improvement = remediation_plan.number("expectedImprovementScore")
        ctx.breakpoint(
            question=(
                f"Remediation plan created with {len(phases)} phases and "
                f"{remediation_plan.get('totalTasks', 0)} tasks. Estimated effort: "
                f"{remediation_plan.get('estimatedEffort')}. Expected compliance improvement: "
                f"+{improvement} points. Review and approve for implementation?"
            ),
            title="Remediation Plan Review",
            context={
                "runId": ctx.run_id,
                "plan": {
                    "totalTasks": remediation_plan.get("totalTasks", 0),
                    "phases": len(phases),
                    "criticalBarriers": remediation_plan.get("criticalBarriers", 0),
                    "highPriorityBarriers": remediation_plan.get("highPriorityBarriers", 0),
                    "estimatedEffort": remediation_plan.get("estimatedEffort"),
                    "quickWins": len(remediation_plan.items("quickWins")),
                    "expectedScore": compliance_score + improvement,
                },
                "files": [
                    file_ref(remediation_plan.get("planPath"), "markdown", "Remediation Plan"),
                    file_ref(
                        remediation_plan.get("roadmapPath"),
                        "markdown",
                        "Implementation Roadmap",
                    ),
                    file_ref(
                        audit_report.get("mainReportPath"),
                        "html",
                        "Accessibility Audit Report",
                    ),
                ],
            },
        )

    ctx.log("info", "Phase 17: Developing accessibility governance recommendations")
    governance = ctx.task(
        governance_task,
        {
            "projectName": project_name,
            "complianceScore": compliance_score,
            "achievedComplianceLevel": achieved_level,
            "wcagLevel": wcag_level,
            "prioritizedBarriers": prioritized_barriers,
            "remediationPlan": dump_result(remediation_plan),
            "outputDir": output_dir,
        },
    )
    recommendations.extend(governance.items("recommendations"))
    artifacts.extend(governance.artifacts)

    ctx.log("info", "Phase 18: Conducting final accessibility assessment and recommendations")
    final_assessment = ctx.task(
        final_assessment_task,
        {
            "projectName": project_name,
            "wcagLevel": wcag_level,
            "complianceScore": compliance_score,
            "achievedComplianceLevel": achieved_level,
            "targetComplianceLevel": wcag_level,
            "barriers": list(barriers),
            "prioritizedBarriers": prioritized_barriers,
            "recommendations": list(recommendations),
            "remediationPlan": dump_result(remediation_plan),
            "usabilityReport": dump_result(usability_report),
            "auditReport": audit_report.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(final_assessment.artifacts)

    compliant = meets_compliance(wcag_level, achieved_level)
    severity_counts = {
        severity: count_where(prioritized_barriers, "severity", severity)
        for severity in _SEVERITIES
    }

    final_files = [
        file_ref(audit_report.get("mainReportPath"), "html", "Main Accessibility Audit Report"),
        file_ref(audit_report.get("executiveSummaryPath"), "pdf", "Executive Summary"),
        file_ref(barrier_analysis.get("reportPath"), "html", "Barrier Analysis Report"),
    ]
    if remediation_plan is not None:
        final_files.append(
            file_ref(remediation_plan.get("planPath"), "markdown", "Remediation Plan"),
        )
    if vpat_report is not None:
        final_files.append(file_ref(vpat_report.get("vpatPath"), "html", "VPAT Report"))
    final_files.append(
        file_ref(final_assessment.get("reportPath"), "markdown", "Final Assessment"),
    )

    ctx.breakpoint(
        question=(
            f"Accessibility audit complete. WCAG {wcag_level} compliance: "
            f"{'ACHIEVED' if compliant else 'NOT MET'} (Current: {achieved_level}, "
            f"Score: {compliance_score}/100). {len(barriers)} barriers identified, "
            f"{len(recommendations)} recommendations provided. "
            f"{final_assessment.text('verdict')}. Approve final audit deliverables?"
        ),
        title="Final Accessibility Audit Approval",
        context={
            "runId": ctx.run_id,
            "summary": {
                "projectName": project_name,
                "productUrl": product_url,
                "targetWcagLevel": wcag_level,
                "achievedComplianceLevel": achieved_level,
                "complianceScore": compliance_score,
                "meetsCompliance": compliant,
                "totalBarriers": len(barriers),
                "criticalBarriers": severity_counts["critical"],
                "highPriorityBarriers": severity_counts["high"],
                "totalRecommendations": len(recommendations),
                "remediationPhases": (
                    len(remediation_plan.items("phases")) if remediation_plan else 0
                ),
                "estimatedRemediationEffort": (
                    remediation_plan.get("estimatedEffort") if remediation_plan else "N/A"
                ),
            },
            "assessment": {
                "verdict": final_assessment.get("verdict"),
                "readinessLevel": final_assessment.get("readinessLevel"),
                "strengths": final_assessment.items("strengths"),
                "criticalConcerns": final_assessment.items("criticalConcerns"),
                "nextSteps": final_assessment.items("nextSteps"),
            },
            "files": final_files,
        },
    )

    end_time = ctx.now()

    return {
        "success": True,
        "projectName": project_name,
        "productUrl": product_url,
        "complianceLevel": achieved_level,
        "complianceScore": compliance_score,
        "targetComplianceLevel": wcag_level,
        "meetsCompliance": compliant,
        "complianceGap": 0 if compliant else 100 - compliance_score,
        "barriers": {
            "total": len(barriers),
            **severity_counts,
            "details": prioritized_barriers,
        },
        "recommendations": {
            "total": len(recommendations),
            "details": recommendations,
        },
        "assessmentResults": {
            "keyboardNavigation": {
                "score": keyboard.get("score"),
                "issues": len(keyboard.items("barriers")),
                "status": keyboard.get("status"),
            },
            "screenReaderCompatibility": {
                "compatible": screen_reader.get("compatible"),
                "testedTechnologies": screen_reader.items("testedTechnologies"),
                "issues": len(screen_reader.items("barriers")),
            },
            "visualDesign": {
                "contrastIssues": visual.items("contrastIssues"),
                "designIssues": visual.items("designIssues"),
                "score": visual.get("score"),
            },
            "cognitiveAccessibility": {
                "score": cognitive.get("score"),
                "issues": len(cognitive.items("barriers")),
            },
            "forms": {
                "accessible": forms.get("accessible"),
                "issues": len(forms.items("barriers")),
            },
            "multimedia": {
                "accessible": multimedia.get("accessible"),
                "issues": len(multimedia.items("barriers")),
            },
        },
        "remediationPlan": (
            {
                "totalTasks": remediation_plan.get("totalTasks"),
                "phases": remediation_plan.items("phases"),
                "estimatedEffort": remediation_plan.get("estimatedEffort"),
                "expectedImprovementScore": remediation_plan.get("expectedImprovementScore"),
                "quickWins": remediation_plan.items("quickWins"),
                "planPath": remediation_plan.get("planPath"),
                "roadmapPath": remediation_plan.get("roadmapPath"),
            }
            if remediation_plan is not None
            else None
        ),
        "usabilityReport": (
            {
                "participantCount": usability_report.get("participantCount"),
                "successRate": usability_report.get("successRate"),
                "keyFindings": usability_report.items("keyFindings"),
                "reportPath": usability_report.get("reportPath"),
            }
            if usability_report is not None
            else None
        ),
        "vpatReport": (
            {
                "vpatPath": vpat_report.get("vpatPath"),
                "complianceSummary": vpat_report.get("complianceSummary"),
            }
            if vpat_report is not None
            else None
        ),
        "finalAssessment": {
            "verdict": final_assessment.get("verdict"),
            "readinessLevel": final_assessment.get("readinessLevel"),
            "recommendation": final_assessment.get("recommendation"),
            "strengths": final_assessment.items("strengths"),
            "concerns": final_assessment.items("concerns"),
            "nextSteps": final_assessment.items("nextSteps"),
        },
        "artifacts": artifacts,
        "duration": elapsed_ms(start_time, end_time),
        "metadata": base_metadata(
            PROCESS_ID,
            start_time,
            wcagLevel=wcag_level,
            complianceStandards=compliance_standards,
            scope=len(scope),
            userPersonas=len(user_personas),
            assistiveTechnologies=len(assistive_technologies),
        ),
    }

