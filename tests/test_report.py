"""Summary rendering for diagnostics, step trails and dry runs."""

from __future__ import annotations

from kube_triage.agent.report import format_diagnostic, format_plan, format_step_trail, render_summary, truncate
from kube_triage.diagnosis.models import (
    Category,
    DiagnosticResult,
    Issue,
    IssueKind,
    IssueSource,
    Run,
    Severity,
    StepResult,
    Target,
    WorkflowType,
)
from kube_triage.workflow.planner import plan


def _run(results: list[StepResult], workflow: WorkflowType = WorkflowType.DNS) -> Run:
    target = Target(resource_name="web", namespace="prod", found=True)
    return Run(
        query="q",
        workflow_type=workflow,
        target=target,
        steps=plan(workflow, target),
        results=results,
        success=any(r.succeeded for r in results),
    )


def test_truncate() -> None:
    assert truncate("abc", 5) == "abc"
    assert truncate("x" * 250) == "x" * 200 + "..."


def test_diagnostic_report_sections() -> None:
    d = DiagnosticResult(
        pod_status="CrashLoopBackOff",
        issues=[
            Issue(
                kind=IssueKind.ERROR,
                source=IssueSource.STATUS,
                message="Pod is in CrashLoopBackOff state",
                severity=Severity.CRITICAL,
                category=Category.STABILITY,
                suggestion="Check application logs for crash reasons",
            )
        ],
        root_cause="Pod is in CrashLoopBackOff state",
        recommendation="Check application logs for crash reasons",
        next_steps=["first", "second"],
    )
    text = format_diagnostic(d)
    assert "**Current Status:** CrashLoopBackOff" in text
    assert "**Root Cause:** Pod is in CrashLoopBackOff state" in text
    assert "1. [CRITICAL] [STABILITY] Pod is in CrashLoopBackOff state" in text
    assert "Suggestion: Check application logs for crash reasons" in text
    assert "## Next Steps" in text
    assert "2. second" in text


def test_diagnostic_report_omits_empty_sections() -> None:
    text = format_diagnostic(DiagnosticResult(root_cause="No critical issues detected", recommendation="r"))
    assert "Current Status" not in text
    assert "Issues Found" not in text
    assert "Next Steps" not in text


def test_step_trail_tally_and_truncation() -> None:
    results = [
        StepResult(command="c1", output="nameserver 10.96.0.10"),
        StepResult(command="c2", output="", exit_code=1, error="exit status 1"),
        StepResult(command="c3", output="y" * 300),
    ]
    text = format_step_trail(_run(results))
    assert "# Network Troubleshooting: DNS" in text
    assert "**Target:** pod `web` in namespace `prod`" in text
    assert "1. **SUCCESS** - Test DNS configuration" in text
    assert "2. **FAILED** - Test internal DNS resolution" in text
    assert "Error: exit status 1" in text
    assert "y" * 200 + "..." in text
    assert "y" * 201 not in text
    assert "2/3 steps completed successfully" in text


def test_step_trail_all_failed() -> None:
    results = [StepResult(command=f"c{i}", exit_code=1, error="boom") for i in range(3)]
    text = format_step_trail(_run(results))
    assert "All steps failed - check pod name, namespace, and permissions" in text


def test_general_target_line() -> None:
    run = Run(query="q", workflow_type=WorkflowType.GENERAL, target=Target(), success=False)
    assert "general network troubleshooting" in format_step_trail(run)


def test_render_summary_prefers_diagnostic() -> None:
    results = [StepResult(command="c", output="x")] * 5
    run = _run(results, WorkflowType.POD_DIAGNOSTICS)
    run.diagnostic = DiagnosticResult(root_cause="rc", recommendation="rec")
    assert "Pod Diagnostic Analysis" in render_summary(run)
    run.diagnostic = None
    assert "Network Troubleshooting: POD_DIAGNOSTICS" in render_summary(run)


def test_plan_listing() -> None:
    target = Target(resource_name="web", namespace="prod", found=True)
    text = format_plan(WorkflowType.NETSTAT, target, plan(WorkflowType.NETSTAT, target))
    assert "# Planned Steps: NETSTAT" in text
    assert "`kubectl exec web -n prod -- netstat -tulpn`" in text
    assert "no commands were executed" in text
