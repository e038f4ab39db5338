"""Orchestrator: classify → extract → plan → execute → parse → synthesize → report."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from kube_triage.agent.report import format_plan, render_summary
from kube_triage.config import Settings, get_settings
from kube_triage.diagnosis.models import Classification, Run, Target, WorkflowStep, WorkflowType
from kube_triage.diagnosis.parsers import Findings, parse_step_output
from kube_triage.diagnosis.synthesizer import synthesize
from kube_triage.execution.executor import StepExecutor, SubprocessExecutor
from kube_triage.execution.kubeconfig import resolve_cluster_access
from kube_triage.intent.classifier import classify
from kube_triage.intent.extractor import extract
from kube_triage.workflow.planner import PlanOptions, plan

logger = logging.getLogger(__name__)

# A diagnostic needs at least the status listing plus one more view of the pod.
MIN_RESULTS_FOR_DIAGNOSTIC = 2


class TroubleshootingEngine:
    """Binds one executor and one settings instance to the pipeline.

    No state is kept between runs; every call to `run` builds its own target,
    steps, results and diagnostic.
    """

    def __init__(self, executor: StepExecutor | None = None, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._executor = executor

    @property
    def executor(self) -> StepExecutor:
        # Cluster access is resolved on first execution so classify/extract stay offline.
        if self._executor is None:
            access = resolve_cluster_access(self.settings.kubeconfig, self.settings.context)
            self._executor = SubprocessExecutor(access, timeout=self.settings.command_timeout)
        return self._executor

    @property
    def plan_options(self) -> PlanOptions:
        s = self.settings
        return PlanOptions(
            cli=s.cli,
            default_namespace=s.namespace,
            log_tail_lines=s.log_tail_lines,
            capture_interface=s.capture_interface,
            capture_duration=s.capture_duration,
        )

    def classify(self, query: str) -> Classification:
        return classify(query)

    def extract(self, query: str) -> Target:
        return extract(query)

    def plan(self, query: str) -> tuple[WorkflowType, Target, list[WorkflowStep]]:
        """Classify and extract, then plan steps without executing anything."""
        workflow = self.classify(query).workflow
        target = self.extract(query)
        return workflow, target, plan(workflow, target, self.plan_options)

    def plan_summary(self, query: str) -> str:
        workflow, target, steps = self.plan(query)
        return format_plan(workflow, target, steps, self.settings.namespace)

    def run(self, query: str) -> Run:
        """Execute every planned step in order and build the summary."""
        workflow, target, steps = self.plan(query)
        logger.info("Running %s workflow (%d steps) for query: %s", workflow.value, len(steps), query)

        findings = Findings()
        results = []
        for step in steps:
            logger.info("Step %d/%d: %s", step.ordinal, len(steps), step.description)
            result = self.executor.execute(step.command)
            if not result.succeeded:
                logger.warning("Step %d failed (exit %d): %s", step.ordinal, result.exit_code, result.error)
            results.append(result)
            if workflow == WorkflowType.POD_DIAGNOSTICS:
                parse_step_output(step.output, result, findings)

        success = any(r.succeeded for r in results)
        diagnostic = None
        # Nothing was observed when every step failed, so no healthy verdict either.
        if workflow == WorkflowType.POD_DIAGNOSTICS and len(results) >= MIN_RESULTS_FOR_DIAGNOSTIC and success:
            diagnostic = synthesize(findings.pod_status, findings.issues)

        run = Run(
            query=query,
            workflow_type=workflow,
            target=target,
            steps=steps,
            results=results,
            diagnostic=diagnostic,
            success=success,
        )
        run.summary = render_summary(run, self.settings.output_preview_chars, self.settings.namespace)
        return run


def run(query: str, executor: StepExecutor | None = None, settings: Settings | None = None) -> Run:
    """Answer one query with a throwaway engine."""
    return TroubleshootingEngine(executor, settings).run(query)


def print_run(result: Run, console: Console | None = None) -> None:
    """Print run summary to console using Rich."""
    c = console or Console()
    border = "blue" if result.success else "red"
    c.print(Panel(Markdown(result.summary), title="kube-triage Report", border_style=border))
    if result.diagnostic and result.diagnostic.logs_needed:
        c.print("\n[bold]Tip:[/bold] review the full pod logs for crash details.")
