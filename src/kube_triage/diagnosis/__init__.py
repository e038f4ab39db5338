"""Diagnosis layer: parse step output into Issues and synthesize a root cause."""

from kube_triage.diagnosis.models import (
    Category,
    Classification,
    DiagnosticResult,
    Issue,
    IssueKind,
    IssueSource,
    Run,
    Severity,
    StepOutput,
    StepResult,
    Target,
    WorkflowStep,
    WorkflowType,
)
from kube_triage.diagnosis.parsers import Findings, parse_step_output
from kube_triage.diagnosis.synthesizer import synthesize

__all__ = [
    "Category",
    "Classification",
    "DiagnosticResult",
    "Findings",
    "Issue",
    "IssueKind",
    "IssueSource",
    "Run",
    "Severity",
    "StepOutput",
    "StepResult",
    "Target",
    "WorkflowStep",
    "WorkflowType",
    "parse_step_output",
    "synthesize",
]
