"""Component library and design system development process.

@process specializations/ux-ui-design/component-library
@description Component Library Development - design system strategy, design tokens, color,
typography and spacing systems, foundational and complex component designs, accessibility
audit, documentation, Storybook, governance, developer handoff and adoption planning.
@inputs { projectName: string, scope?: string, designLanguage?: object, platforms?: array,
technology?: string, existingDesigns?: array, accessibilityLevel?: string,
targetFrameworks?: array, includeIcons?: boolean, includeIllustrations?: boolean,
versioningStrategy?: string }
@outputs { success: boolean, componentLibrary: object, designTokens: object,
colorSystem: object, typography: object, iconSystem: object, accessibility: object,
documentation: object, codeImplementation: object, governance: object, handoff: object,
adoption: object, validation: object, artifacts: array }
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import Any

from ux_processes.processes._common import (
    artifact_files,
    base_metadata,
    dump_result,
    dump_results,
    elapsed_ms,
    ensure_inputs,
    file_ref,
    option,
)
from ux_processes.runtime.context import ProcessContext
from ux_processes.runtime.tasks import PhaseResult, TaskRegistry

PROCESS_ID = "specializations/ux-ui-design/component-library"
TASKS = TaskRegistry(PROCESS_ID)

COLOR_ACCESSIBILITY_THRESHOLD = 90
REVIEW_PREVIEW_LIMIT = 5

_AGENT = "general-purpose"
_LABELS = ["agent", "design-system"]


def _phase_title(phase: str):
    return lambda args: f"{phase} - {args.get('projectName')}"


def component_name(component: Any) -> str:
    if isinstance(component, Mapping):
        return str(component.get("name", "component"))
    return str(component)


strategy_task = TASKS.agent_task(
    "design-system-strategy",
    title=_phase_title("Phase 1: Design System Strategy"),
    agent=_AGENT,
    role="Design System Architect",
    task="Plan comprehensive design system strategy and architecture",
    instructions=[
        "Define design system vision, goals and principles",
        "Audit existing designs and identify reusable patterns",
        "Categorize components as foundational, complex or patterns",
        "Choose an architecture approach such as Atomic Design",
        "Establish the governance model",
    ],
    outputs={
        "success": "boolean",
        "componentCount": "number",
        "architecture": "string",
        "designPrinciples": "array",
        "governanceModel": "object",
        "artifacts": "array",
    },
    labels=[*_LABELS, "strategy"],
)

tokens_task = TASKS.agent_task(
    "design-tokens-definition",
    title=_phase_title("Phase 2: Design Tokens Definition"),
    agent=_AGENT,
    role="Design Token Specialist",
    task="Define platform-agnostic design tokens",
    instructions=[
        "Separate primitive, semantic and component tokens",
        "Cover color, typography, spacing, shadow, radius and motion",
    ],
    outputs={
        "designTokens": "object",
        "tokenCount": "number",
        "categories": "array",
        "tokensFilePath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "tokens"],
)

color_task = TASKS.agent_task(
    "color-system-design",
    title=_phase_title("Phase 3: Color System Design"),
    agent=_AGENT,
    role="Color System Designer",
    task="Design an accessible color system",
    instructions=[
        "Build primary, secondary, semantic and neutral palettes",
        "Check every text and surface pair for contrast",
        "Score color accessibility 0-100",
    ],
    outputs={
        "colors": "object",
        "paletteCount": "number",
        "accessibilityScore": "number",
        "contrastIssues": "array",
        "accessibilityRecommendations": "array",
        "colorPalettePath": "string",
        "accessibilityReportPath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "color"],
)

typography_task = TASKS.agent_task(
    "typography-system-design",
    title=_phase_title("Phase 4: Typography System"),
    agent=_AGENT,
    role="Typography Designer",
    task="Design the type scale and font stack",
    instructions=["Define a modular type scale", "Keep body text legible at every size"],
    outputs={
        "typography": "object",
        "fonts": "array",
        "scaleCount": "number",
        "artifacts": "array",
    },
    labels=[*_LABELS, "typography"],
)

spacing_task = TASKS.agent_task(
    "spacing-layout-system",
    title=_phase_title("Phase 5: Spacing & Layout"),
    agent=_AGENT,
    role="Layout System Designer",
    task="Design the spacing scale and layout grid",
    instructions=["Derive the spacing scale from one base unit", "Define grid and breakpoints"],
    outputs={"spacing": "object", "artifacts": "array"},
    labels=[*_LABELS, "layout"],
)

inventory_task = TASKS.agent_task(
    "component-inventory",
    title=_phase_title("Phase 6: Component Inventory"),
    agent=_AGENT,
    role="Component Inventory Analyst",
    task="Inventory the components the library needs",
    instructions=[
        "Give each component a name, a category (foundational or complex) and a priority",
    ],
    outputs={"components": "array", "artifacts": "array"},
    labels=[*_LABELS, "inventory"],
)

component_design_task = TASKS.agent_task(
    "component-design",
    title=lambda args: (
        f"Component Design: {component_name(args.get('component'))} - {args.get('projectName')}"
    ),
    agent=_AGENT,
    role="UI Component Designer",
    task="Design one component with all variants and states",
    instructions=[
        "Use only design tokens for visual values",
        "Design every variant and interactive state",
        "Specify keyboard and screen reader behavior",
    ],
    outputs={
        "componentName": "string",
        "variantCount": "number",
        "stateCount": "number",
        "accessibilityScore": "number",
        "designFilePath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "component"],
)

pattern_library_task = TASKS.agent_task(
    "pattern-library-design",
    title=_phase_title("Phase 9: Pattern Library"),
    agent=_AGENT,
    role="Pattern Designer",
    task="Create reusable UI patterns from components",
    instructions=[
        "Design common patterns (forms, cards, modals, navigation)",
        "Document pattern usage",
        "Create pattern examples",
    ],
    outputs={"patternCount": "number", "artifacts": "array"},
    labels=[*_LABELS, "patterns"],
)

icon_task = TASKS.agent_task(
    "icon-system-design",
    title=_phase_title("Phase 10: Icon System"),
    agent=_AGENT,
    role="Icon Designer",
    task="Design comprehensive icon system",
    instructions=[
        "Create icon grid and design principles",
        "Design icon set (outline, filled, colored)",
        "Export in multiple formats",
    ],
    outputs={"iconCount": "number", "formats": "array", "artifacts": "array"},
    labels=[*_LABELS, "icons"],
)

illustration_task = TASKS.agent_task(
    "illustration-system-design",
    title=_phase_title("Phase 11: Illustration System"),
    agent=_AGENT,
    role="Illustration Designer",
    task="Design illustration system",
    instructions=[
        "Define illustration style",
        "Create illustration library",
        "Document usage guidelines",
    ],
    outputs={"illustrationCount": "number", "artifacts": "array"},
    labels=[*_LABELS, "illustrations"],
)

accessibility_task = TASKS.agent_task(
    "accessibility-audit",
    title=_phase_title("Phase 12: Accessibility Audit"),
    agent=_AGENT,
    role="Accessibility Specialist",
    task="Conduct comprehensive accessibility audit",
    instructions=[
        "Audit color contrast ratios",
        "Check keyboard navigation",
        "Validate ARIA attributes",
        "Create remediation plan",
    ],
    outputs={
        "overallScore": "number",
        "criticalIssues": "array",
        "complianceStatus": "string",
        "reportPath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "accessibility"],
)

responsive_task = TASKS.agent_task(
    "responsive-behavior",
    title=_phase_title("Phase 13: Responsive Design"),
    agent=_AGENT,
    role="Responsive Design Specialist",
    task="Design responsive behavior for all components",
    instructions=["Define breakpoint behavior", "Design mobile adaptations"],
    outputs={"artifacts": "array"},
    labels=[*_LABELS, "responsive"],
)

interaction_task = TASKS.agent_task(
    "interaction-animation",
    title=_phase_title("Phase 14: Interactions & Animations"),
    agent=_AGENT,
    role="Interaction Designer",
    task="Design interactions and animations",
    instructions=[
        "Define micro-interactions",
        "Create animation specifications",
        "Document motion principles",
    ],
    outputs={"artifacts": "array"},
    labels=[*_LABELS, "interaction"],
)

documentation_task = TASKS.agent_task(
    "component-documentation",
    title=_phase_title("Phase 15: Component Documentation"),
    agent=_AGENT,
    role="Technical Writer",
    task="Create comprehensive component documentation",
    instructions=[
        "Document each component with props, usage and examples",
        "Create getting started guide",
    ],
    outputs={
        "documentation": "object",
        "componentCount": "number",
        "mainDocPath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "documentation"],
)

design_tool_task = TASKS.agent_task(
    "design-tool-library",
    title=_phase_title("Phase 16: Design Tool Library Setup"),
    agent=_AGENT,
    role="Design Tool Specialist",
    task="Set up component library in Figma/Sketch",
    instructions=[
        "Organize components in library",
        "Set up styles and tokens",
        "Publish library",
    ],
    outputs={
        "library": "object",
        "tool": "string",
        "libraryFilePath": "string",
        "publishStatus": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "design-tool"],
)

implementation_task = TASKS.agent_task(
    "code-implementation-plan",
    title=_phase_title("Phase 17: Code Implementation Plan"),
    agent=_AGENT,
    role="Frontend Architect",
    task="Plan code implementation strategy",
    instructions=[
        "Define component architecture",
        "Plan token transformation",
        "Create build pipeline",
    ],
    outputs={
        "implementationPlan": "object",
        "implementationPlanPath": "string",
        "estimatedEffort": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "implementation"],
)

storybook_task = TASKS.agent_task(
    "storybook-setup",
    title=_phase_title("Phase 18: Storybook Setup"),
    agent=_AGENT,
    role="Storybook Specialist",
    task="Set up Storybook for component documentation",
    instructions=[
        "Create stories for all components",
        "Add addons (a11y, docs, controls)",
    ],
    outputs={"storiesCount": "number", "storybookUrl": "string", "artifacts": "array"},
    labels=[*_LABELS, "storybook"],
)

governance_task = TASKS.agent_task(
    "governance-versioning",
    title=_phase_title("Phase 19: Governance & Versioning"),
    agent=_AGENT,
    role="Design System Governance Lead",
    task="Establish governance and versioning",
    instructions=[
        "Define versioning strategy",
        "Create contribution process",
        "Set up approval workflow",
    ],
    outputs={
        "governanceModelPath": "string",
        "contributionGuidelinePath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "governance"],
)

handoff_task = TASKS.agent_task(
    "developer-handoff",
    title=_phase_title("Phase 20: Developer Handoff"),
    agent=_AGENT,
    role="Design-Dev Bridge Specialist",
    task="Create developer handoff package",
    instructions=["Create handoff documentation", "Export design assets"],
    outputs={
        "handoffPackagePath": "string",
        "assetsPackagePath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "handoff"],
)

adoption_task = TASKS.agent_task(
    "adoption-training",
    title=_phase_title("Phase 21: Adoption & Training"),
    agent=_AGENT,
    role="Change Management Specialist",
    task="Create adoption and training plan",
    instructions=["Create training materials", "Plan rollout strategy"],
    outputs={"trainingPlanPath": "string", "rolloutStrategy": "string", "artifacts": "array"},
    labels=[*_LABELS, "adoption"],
)

validation_task = TASKS.agent_task(
    "component-library-validation",
    title=_phase_title("Phase 22: Final Validation"),
    agent=_AGENT,
    role="Senior Design System Architect",
    task="Validate component library completeness and quality",
    instructions=[
        "Validate all components are complete",
        "Verify accessibility compliance",
        "Assess production readiness",
        "Recommend approve, conditional-approve or review-required",
    ],
    outputs={
        "validationScore": "number",
        "productionReady": "boolean",
        "verdict": "string",
        "recommendation": "string",
        "reportPath": "string",
        "artifacts": "array",
    },
    labels=[*_LABELS, "validation"],
)


def _components_in(components: list[Any], category: str) -> list[Any]:
    return [
        component
        for component in components
        if isinstance(component, Mapping) and component.get("category") == category
    ]


def process(inputs: Mapping[str, Any], ctx: ProcessContext) -> dict[str, Any]:  # noqa: C901, PLR0915
    inputs = ensure_inputs(inputs)
    project_name = option(inputs, "projectName")
    scope = option(inputs, "scope", "product-suite")
    design_language = option(inputs, "designLanguage", {})
    platforms = option(inputs, "platforms", ["web"])
    technology = option(inputs, "technology", "react")
    existing_designs = option(inputs, "existingDesigns", [])
    accessibility_level = option(inputs, "accessibilityLevel", "WCAG-AA")
    target_frameworks = option(inputs, "targetFrameworks", ["React"])
    include_icons = option(inputs, "includeIcons", True)
    include_illustrations = option(inputs, "includeIllustrations", True)
    versioning_strategy = option(inputs, "versioningStrategy", "semantic")
    output_dir = option(inputs, "outputDir", "component-library-output")

    start_time = ctx.now()
    artifacts: list[Any] = []

    ctx.log("info", f"Starting Component Library Development: {project_name}")
    ctx.log(
        "info",
        f"Scope: {scope}, Platforms: {', '.join(map(str, platforms))}, Technology: {technology}",
    )

    ctx.log("info", "Phase 1: Planning design system strategy")
    strategy = ctx.task(
        strategy_task,
        {
            "projectName": project_name,
            "scope": scope,
            "designLanguage": design_language,
            "platforms": platforms,
            "technology": technology,
            "existingDesigns": existing_designs,
            "targetFrameworks": target_frameworks,
            "accessibilityLevel": accessibility_level,
            "outputDir": output_dir,
        },
    )

    if not strategy.flag("success"):
        return {
            "success": False,
            "error": "Design system strategy planning failed",
            "details": strategy.to_dict(),
            "metadata": base_metadata(PROCESS_ID, start_time),
        }

    artifacts.extend(strategy.artifacts)

    ctx.breakpoint(
        question=(
            f"Design system strategy planned for {project_name}. Scope: "
            f"{strategy.get('componentCount')} components across {len(platforms)} platform(s). "
            f"Architecture: {strategy.get('architecture')}. Review and approve strategy?"
        ),
        title="Design System Strategy Review",
        context={
            "runId": ctx.run_id,
            "strategy": {
                "projectName": project_name,
                "componentCount": strategy.get("componentCount"),
                "platforms": platforms,
                "architecture": strategy.get("architecture"),
                "accessibilityLevel": accessibility_level,
            },
            "principles": strategy.get("designPrinciples"),
            "governance": strategy.get("governanceModel"),
            "files": [
                {"path": item["path"], "format": item["format"]}
                for item in artifact_files(
                    strategy.artifacts,
                    limit=None,
                    default_format="markdown",
                )
            ],
        },
    )

    ctx.log("info", "Phase 2: Defining design tokens")
    tokens = ctx.task(
        tokens_task,
        {
            "projectName": project_name,
            "designLanguage": design_language,
            "platforms": platforms,
            "strategyPlanning": strategy.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(tokens.artifacts)
    design_tokens = tokens.get("designTokens")
    ctx.log(
        "info",
        f"Design tokens defined: {tokens.get('tokenCount')} tokens across "
        f"{len(tokens.items('categories'))} categories",
    )

    ctx.log("info", "Phase 3: Designing color system")
    color_system = ctx.task(
        color_task,
        {
            "projectName": project_name,
            "designLanguage": design_language,
            "designTokens": design_tokens,
            "accessibilityLevel": accessibility_level,
            "platforms": platforms,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(color_system.artifacts)

    color_score = color_system.number("accessibilityScore")
    if color_score < COLOR_ACCESSIBILITY_THRESHOLD:
        ctx.breakpoint(
            question=(
                f"Color accessibility score: {color_score}/100. Below recommended threshold of "
                f"{COLOR_ACCESSIBILITY_THRESHOLD} for {accessibility_level}. "
                "Review color contrast issues?"
            ),
            title="Color Accessibility Review",
            context={
                "runId": ctx.run_id,
                "accessibilityScore": color_score,
                "contrastIssues": color_system.get("contrastIssues"),
                "recommendations": color_system.get("accessibilityRecommendations"),
                "files": [
                    file_ref(color_system.get("colorPalettePath"), "image", "Color Palette"),
                    file_ref(
                        color_system.get("accessibilityReportPath"),
                        "markdown",
                        "Accessibility Report",
                    ),
                ],
            },
        )

    ctx.log("info", "Phase 4: Designing typography system")
    typography = ctx.task(
        typography_task,
        {
            "projectName": project_name,
            "designLanguage": design_language,
            "platforms": platforms,
            "designTokens": design_tokens,
            "accessibilityLevel": accessibility_level,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(typography.artifacts)

    ctx.log("info", "Phase 5: Designing spacing and layout system")
    spacing = ctx.task(
        spacing_task,
        {
            "projectName": project_name,
            "platforms": platforms,
            "designTokens": design_tokens,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(spacing.artifacts)

    ctx.log("info", "Phase 6: Creating component inventory")
    inventory = ctx.task(
        inventory_task,
        {
            "projectName": project_name,
            "scope": scope,
            "platforms": platforms,
            "existingDesigns": existing_designs,
            "strategyPlanning": strategy.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(inventory.artifacts)
    components = inventory.items("components")
    total_components = len(components)
    ctx.log("info", f"Component inventory: {total_components} components identified")

    design_args = {
        "projectName": project_name,
        "designTokens": design_tokens,
        "colorSystem": color_system.get("colors"),
        "typographySystem": typography.get("typography"),
        "spacingSystem": spacing.get("spacing"),
        "platforms": platforms,
        "accessibilityLevel": accessibility_level,
        "outputDir": output_dir,
    }

    ctx.log("info", "Phase 7: Designing foundational components in parallel")
    foundational_designs: list[PhaseResult] = ctx.parallel_all(
        [
            partial(ctx.task, component_design_task, {**design_args, "component": component})
            for component in _components_in(components, "foundational")
        ],
    )
    for design in foundational_designs:
        artifacts.extend(design.artifacts)
    ctx.log("info", f"Foundational components designed: {len(foundational_designs)}")

    ctx.breakpoint(
        question=(
            f"Foundational components designed: {len(foundational_designs)} components "
            "(Button, Input, Checkbox, Radio, etc.). Review designs and approve to proceed "
            "with complex components?"
        ),
        title="Foundational Components Review",
        context={
            "runId": ctx.run_id,
            "componentsDesigned": len(foundational_designs),
            "components": [
                {
                    "name": design.get("componentName"),
                    "variants": design.get("variantCount"),
                    "states": design.get("stateCount"),
                    "accessibilityScore": design.get("accessibilityScore"),
                }
                for design in foundational_designs
            ],
            "files": [
                file_ref(
                    design.get("designFilePath"),
                    "image",
                    f"Component: {design.get('componentName')}",
                )
                for design in foundational_designs[:REVIEW_PREVIEW_LIMIT]
            ],
        },
    )

    ctx.log("info", "Phase 8: Designing complex components in parallel")
    foundational_dump = dump_results(foundational_designs)
    complex_designs: list[PhaseResult] = ctx.parallel_all(
        [
            partial(
                ctx.task,
                component_design_task,
                {
                    **design_args,
                    "component": component,
                    "foundationalComponents": foundational_dump,
                },
            )
            for component in _components_in(components, "complex")
        ],
    )
    for design in complex_designs:
        artifacts.extend(design.artifacts)
    ctx.log("info", f"Complex components designed: {len(complex_designs)}")
    complex_dump = dump_results(complex_designs)

    ctx.log("info", "Phase 9: Designing pattern library")
    pattern_library = ctx.task(
        pattern_library_task,
        {
            "projectName": project_name,
            "componentInventory": inventory.to_dict(),
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "platforms": platforms,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(pattern_library.artifacts)
    ctx.log("info", f"Pattern library created: {pattern_library.get('patternCount')} patterns")

    icon_system = None
    if include_icons:
        ctx.log("info", "Phase 10: Designing icon system")
        icon_system = ctx.task(
            icon_task,
            {
                "projectName": project_name,
                "designLanguage": design_language,
                "platforms": platforms,
                "designTokens": design_tokens,
                "outputDir": output_dir,
            },
        )
        artifacts.extend(icon_system.artifacts)
        ctx.log("info", f"Icon system created: {icon_system.get('iconCount')} icons")

    if include_illustrations:
        ctx.log("info", "Phase 11: Designing illustration system")
        illustration_system = ctx.task(
            illustration_task,
            {
                "projectName": project_name,
                "designLanguage": design_language,
                "colorSystem": color_system.get("colors"),
                "platforms": platforms,
                "outputDir": output_dir,
            },
        )
        artifacts.extend(illustration_system.artifacts)

    ctx.log("info", "Phase 12: Conducting accessibility audit")
    accessibility_audit = ctx.task(
        accessibility_task,
        {
            "projectName": project_name,
            "accessibilityLevel": accessibility_level,
            "colorSystem": color_system.to_dict(),
            "typographySystem": typography.to_dict(),
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(accessibility_audit.artifacts)

    accessibility_score = accessibility_audit.get("overallScore")
    critical_issues = accessibility_audit.items("criticalIssues")
    ctx.log(
        "info",
        f"Accessibility audit: {accessibility_score}/100, "
        f"{len(critical_issues)} critical issues",
    )

    if critical_issues:
        ctx.breakpoint(
            question=(
                f"Accessibility audit found {len(critical_issues)} critical issue(s). Overall "
                f"score: {accessibility_score}/100. Review and fix critical accessibility "
                "issues before proceeding?"
            ),
            title="Accessibility Compliance Gate",
            context={
                "runId": ctx.run_id,
                "accessibilityScore": accessibility_score,
                "criticalIssues": critical_issues,
                "targetLevel": accessibility_level,
                "recommendations": accessibility_audit.get("recommendations"),
                "files": [
                    file_ref(
                        accessibility_audit.get("reportPath"),
                        "markdown",
                        "Accessibility Audit Report",
                    ),
                    file_ref(
                        accessibility_audit.get("remediationPlanPath"),
                        "markdown",
                        "Remediation Plan",
                    ),
                ],
            },
        )

    ctx.log("info", "Phase 13: Designing responsive behavior")
    responsive = ctx.task(
        responsive_task,
        {
            "projectName": project_name,
            "platforms": platforms,
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "spacingSystem": spacing.get("spacing"),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(responsive.artifacts)

    ctx.log("info", "Phase 14: Designing interactions and animations")
    interaction = ctx.task(
        interaction_task,
        {
            "projectName": project_name,
            "designLanguage": design_language,
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "platforms": platforms,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(interaction.artifacts)

    ctx.log("info", "Phase 15: Creating component documentation")
    documentation = ctx.task(
        documentation_task,
        {
            "projectName": project_name,
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "patternLibrary": pattern_library.to_dict(),
            "designTokens": design_tokens,
            "platforms": platforms,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(documentation.artifacts)
    component_docs = documentation.get("documentation")

    ctx.log("info", "Phase 16: Setting up design tool library")
    design_tool = ctx.task(
        design_tool_task,
        {
            "projectName": project_name,
            "designTokens": design_tokens,
            "colorSystem": color_system.get("colors"),
            "typographySystem": typography.get("typography"),
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "iconSystem": dump_result(icon_system),
            "platforms": platforms,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(design_tool.artifacts)
    component_library = design_tool.get("library", {})

    ctx.breakpoint(
        question=(
            f"Design library created in {design_tool.get('tool')}. {total_components} "
            "components organized and published. Review library structure and component "
            "organization?"
        ),
        title="Design Library Review",
        context={
            "runId": ctx.run_id,
            "tool": design_tool.get("tool"),
            "componentCount": total_components,
            "libraryStructure": design_tool.get("libraryStructure"),
            "publishStatus": design_tool.get("publishStatus"),
            "files": [
                file_ref(design_tool.get("libraryFilePath"), "link", "Design Library Link"),
                file_ref(
                    design_tool.get("organizationGuidePath"),
                    "markdown",
                    "Library Organization",
                ),
            ],
        },
    )

    ctx.log("info", "Phase 17: Planning code implementation")
    implementation = ctx.task(
        implementation_task,
        {
            "projectName": project_name,
            "technology": technology,
            "targetFrameworks": target_frameworks,
            "platforms": platforms,
            "designTokens": design_tokens,
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(implementation.artifacts)

    ctx.log("info", "Phase 18: Setting up Storybook documentation")
    storybook = ctx.task(
        storybook_task,
        {
            "projectName": project_name,
            "technology": technology,
            "targetFrameworks": target_frameworks,
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "designTokens": design_tokens,
            "componentDocumentation": component_docs,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(storybook.artifacts)
    ctx.log("info", f"Storybook configured: {storybook.get('storiesCount')} stories")

    ctx.log("info", "Phase 19: Establishing versioning and governance")
    governance = ctx.task(
        governance_task,
        {
            "projectName": project_name,
            "versioningStrategy": versioning_strategy,
            "strategyPlanning": strategy.to_dict(),
            "componentLibrary": component_library,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(governance.artifacts)

    ctx.log("info", "Phase 20: Creating developer handoff package")
    handoff = ctx.task(
        handoff_task,
        {
            "projectName": project_name,
            "designTokens": design_tokens,
            "foundationalDesigns": foundational_dump,
            "complexDesigns": complex_dump,
            "componentDocumentation": component_docs,
            "codeImplementation": implementation.get("implementationPlan"),
            "platforms": platforms,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(handoff.artifacts)

    ctx.log("info", "Phase 21: Creating adoption and training plan")
    adoption = ctx.task(
        adoption_task,
        {
            "projectName": project_name,
            "scope": scope,
            "componentLibrary": component_library,
            "documentation": component_docs,
            "governanceSetup": governance.to_dict(),
            "outputDir": output_dir,
        },
    )
    artifacts.extend(adoption.artifacts)

    ctx.log("info", "Phase 22: Conducting final validation")
    validation = ctx.task(
        validation_task,
        {
            "projectName": project_name,
            "componentLibrary": component_library,
            "designTokens": design_tokens,
            "accessibilityAudit": accessibility_audit.to_dict(),
            "componentDocumentation": component_docs,
            "storybookSetup": storybook.to_dict(),
            "governanceSetup": governance.to_dict(),
            "totalComponents": total_components,
            "accessibilityLevel": accessibility_level,
            "outputDir": output_dir,
        },
    )
    artifacts.extend(validation.artifacts)

    validation_score = validation.get("validationScore")
    production_ready = validation.flag("productionReady")

    ctx.breakpoint(
        question=(
            f"Component Library Development Complete! {project_name}: {total_components} "
            f"components, {tokens.get('tokenCount')} design tokens, validation score: "
            f"{validation_score}/100. Production ready: {production_ready}. Approve for release?"
        ),
        title="Component Library Complete",
        context={
            "runId": ctx.run_id,
            "summary": {
                "projectName": project_name,
                "totalComponents": total_components,
                "foundationalComponents": len(foundational_designs),
                "complexComponents": len(complex_designs),
                "designTokens": tokens.get("tokenCount"),
                "patterns": pattern_library.get("patternCount"),
                "icons": icon_system.get("iconCount", 0) if icon_system is not None else 0,
                "validationScore": validation_score,
                "accessibilityScore": accessibility_score,
                "productionReady": production_ready,
            },
            "platforms": platforms,
            "technology": technology,
            "targetFrameworks": target_frameworks,
            "verdict": validation.get("verdict"),
            "recommendation": validation.get("recommendation"),
            "files": [
                file_ref(design_tool.get("libraryFilePath"), "link", "Design Library"),
                file_ref(storybook.get("storybookUrl"), "link", "Storybook Documentation"),
                file_ref(
                    documentation.get("mainDocPath"),
                    "markdown",
                    "Component Documentation",
                ),
                file_ref(handoff.get("handoffPackagePath"), "markdown", "Developer Handoff"),
                file_ref(validation.get("reportPath"), "markdown", "Validation Report"),
            ],
        },
    )

    end_time = ctx.now()

    return {
        "success": production_ready,
        "projectName": project_name,
        "scope": scope,
        "platforms": platforms,
        "technology": technology,
        "componentLibrary": {
            "totalComponents": total_components,
            "foundationalComponents": len(foundational_designs),
            "complexComponents": len(complex_designs),
            "patterns": pattern_library.get("patternCount"),
            "libraryPath": design_tool.get("libraryFilePath"),
            "tool": design_tool.get("tool"),
        },
        "designTokens": {
            "tokenCount": tokens.get("tokenCount"),
            "categories": tokens.items("categories"),
            "tokensPath": tokens.get("tokensFilePath"),
        },
        "colorSystem": {
            "palettes": color_system.get("paletteCount"),
            "accessibilityScore": color_system.get("accessibilityScore"),
            "colorPalettePath": color_system.get("colorPalettePath"),
        },
        "typography": {
            "scales": typography.get("scaleCount"),
            "fonts": typography.get("fonts"),
        },
        "iconSystem": (
            {"iconCount": icon_system.get("iconCount"), "formats": icon_system.get("formats")}
            if icon_system is not None
            else None
        ),
        "accessibility": {
            "overallScore": accessibility_score,
            "targetLevel": accessibility_level,
            "criticalIssues": len(critical_issues),
            "complianceStatus": accessibility_audit.get("complianceStatus"),
        },
        "documentation": {
            "componentDocs": documentation.get("componentCount"),
            "mainDocPath": documentation.get("mainDocPath"),
            "storybookUrl": storybook.get("storybookUrl"),
            "storiesCount": storybook.get("storiesCount"),
        },
        "codeImplementation": {
            "implementationPlanPath": implementation.get("implementationPlanPath"),
            "targetFrameworks": target_frameworks,
            "estimatedEffort": implementation.get("estimatedEffort"),
        },
        "governance": {
            "versioningStrategy": versioning_strategy,
            "governanceModelPath": governance.get("governanceModelPath"),
            "contributionGuidelinePath": governance.get("contributionGuidelinePath"),
        },
        "handoff": {
            "developerPackagePath": handoff.get("handoffPackagePath"),
            "assetsPackagePath": handoff.get("assetsPackagePath"),
        },
        "adoption": {
            "trainingPlanPath": adoption.get("trainingPlanPath"),
            "rolloutStrategy": adoption.get("rolloutStrategy"),
        },
        "validation": {
            "score": validation_score,
            "productionReady": production_ready,
            "verdict": validation.get("verdict"),
            "recommendation": validation.get("recommendation"),
        },
        "artifacts": artifacts,
        "duration": elapsed_ms(start_time, end_time),
        "metadata": base_metadata(
            PROCESS_ID,
            start_time,
            platforms=platforms,
            technology=technology,
            accessibilityLevel=accessibility_level,
        ),
    }
