"""Workflow layer: plan inspection steps per workflow family."""

from kube_triage.workflow.planner import PLANNERS, PlanOptions, plan

__all__ = [
    "PLANNERS",
    "PlanOptions",
    "plan",
]
