"""Render a Run as the Markdown summary shown to the operator."""

from __future__ import annotations

from kube_triage.agent.templates import (
    DIAGNOSTIC_HEADER,
    DIAGNOSTIC_ISSUE,
    DIAGNOSTIC_ISSUES,
    DIAGNOSTIC_NEXT_STEPS,
    DIAGNOSTIC_ROOT_CAUSE,
    DIAGNOSTIC_STATUS,
    DIAGNOSTIC_SUGGESTION,
    PLAN_DRY_RUN,
    PLAN_HEADER,
    TRAIL_ALL_FAILED,
    TRAIL_ERROR,
    TRAIL_HEADER,
    TRAIL_OUTPUT,
    TRAIL_STEP,
    TRAIL_TALLY,
    TRAIL_TARGET,
    TRAIL_TARGET_GENERAL,
)
from kube_triage.diagnosis.models import DiagnosticResult, Run, Target, WorkflowStep, WorkflowType

DEFAULT_PREVIEW_CHARS = 200


def truncate(text: str, limit: int = DEFAULT_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def format_diagnostic(diagnostic: DiagnosticResult) -> str:
    """Status, root cause, numbered issues and next steps; raw output is left out."""
    parts = [DIAGNOSTIC_HEADER]
    if diagnostic.pod_status:
        parts.append(DIAGNOSTIC_STATUS.format(status=diagnostic.pod_status))
    parts.append(
        DIAGNOSTIC_ROOT_CAUSE.format(
            root_cause=diagnostic.root_cause,
            recommendation=diagnostic.recommendation,
        )
    )

    if diagnostic.issues:
        lines: list[str] = []
        for i, issue in enumerate(diagnostic.issues, start=1):
            lines.append(
                DIAGNOSTIC_ISSUE.format(
                    index=i,
                    severity=issue.severity.value.upper(),
                    category=issue.category.value.upper(),
                    message=issue.message,
                )
            )
            if issue.suggestion:
                lines.append(DIAGNOSTIC_SUGGESTION.format(suggestion=issue.suggestion))
        parts.append(DIAGNOSTIC_ISSUES.format(issues="\n".join(lines)))

    if diagnostic.next_steps:
        steps = "\n".join(f"{i}. {s}" for i, s in enumerate(diagnostic.next_steps, start=1))
        parts.append(DIAGNOSTIC_NEXT_STEPS.format(steps=steps))
    return "\n".join(parts)


def _target_line(target: Target, default_namespace: str) -> str:
    if target.found:
        return TRAIL_TARGET.format(
            pod=target.resource_name,
            namespace=target.namespace_or_default(default_namespace),
        )
    return TRAIL_TARGET_GENERAL


def format_step_trail(run: Run, preview_chars: int = DEFAULT_PREVIEW_CHARS, default_namespace: str = "default") -> str:
    """Step-by-step trail with a success tally, for runs without a diagnostic."""
    parts = [
        TRAIL_HEADER.format(workflow=run.workflow_type.value.upper()),
        _target_line(run.target, default_namespace),
    ]

    succeeded = 0
    for step, result in zip(run.steps, run.results):
        if result.succeeded:
            succeeded += 1
        parts.append(
            TRAIL_STEP.format(
                ordinal=step.ordinal,
                status="SUCCESS" if result.succeeded else "FAILED",
                description=step.description,
                command=step.command,
                purpose=step.purpose,
            )
        )
        if result.succeeded and result.output:
            preview = truncate(result.output, preview_chars).replace("\n", " ")
            parts.append(TRAIL_OUTPUT.format(output=preview))
        elif result.error:
            parts.append(TRAIL_ERROR.format(error=result.error))

    if run.success:
        parts.append(TRAIL_TALLY.format(succeeded=succeeded, total=len(run.steps)))
    else:
        parts.append(TRAIL_ALL_FAILED)
    return "\n".join(parts)


def format_plan(
    workflow: WorkflowType,
    target: Target,
    steps: list[WorkflowStep],
    default_namespace: str = "default",
) -> str:
    """Planned commands only, for dry runs."""
    parts = [PLAN_HEADER.format(workflow=workflow.value.upper()), _target_line(target, default_namespace)]
    for step in steps:
        parts.append(f"{step.ordinal}. {step.description}\n   - Command: `{step.command}`\n   - Purpose: {step.purpose}")
    parts.append(PLAN_DRY_RUN)
    return "\n".join(parts)


def render_summary(run: Run, preview_chars: int = DEFAULT_PREVIEW_CHARS, default_namespace: str = "default") -> str:
    if run.workflow_type == WorkflowType.POD_DIAGNOSTICS and run.diagnostic is not None:
        return format_diagnostic(run.diagnostic)
    return format_step_trail(run, preview_chars, default_namespace)
