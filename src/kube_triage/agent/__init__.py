"""Agent: orchestration of classify → plan → execute → diagnose → report."""

from kube_triage.agent.orchestrator import TroubleshootingEngine, classify, extract, print_run, run
from kube_triage.agent.report import render_summary

__all__ = [
    "TroubleshootingEngine",
    "classify",
    "extract",
    "print_run",
    "render_summary",
    "run",
]
