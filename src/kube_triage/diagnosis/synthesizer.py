"""Rank collected Issues into a single root cause and recommendation."""

from __future__ import annotations

import logging
from typing import Iterable

from kube_triage.diagnosis.catalog import NEXT_STEPS
from kube_triage.diagnosis.models import Category, DiagnosticResult, Issue, Severity

logger = logging.getLogger(__name__)

MINOR_ROOT_CAUSE = "Multiple minor issues detected"
MINOR_RECOMMENDATION = "Review all issues and address systematically"
HEALTHY_ROOT_CAUSE = "No critical issues detected"
HEALTHY_RECOMMENDATION = "Pod appears to be healthy, monitor for intermittent issues"

LOG_CATEGORIES = frozenset({Category.STABILITY, Category.APPLICATION})


def _first(issues: list[Issue], severity: Severity) -> Issue | None:
    return next((i for i in issues if i.severity == severity), None)


def synthesize(pod_status: str, issues: Iterable[Issue]) -> DiagnosticResult:
    """Pick the first critical issue, else the first high one, as the root cause.

    Discovery order is preserved; a critical root cause also brings the
    follow-up checklist for its category when one exists.
    """
    found = list(issues)
    result = DiagnosticResult(
        pod_status=pod_status,
        issues=found,
        logs_needed=any(i.category in LOG_CATEGORIES for i in found),
    )

    critical = _first(found, Severity.CRITICAL)
    high = _first(found, Severity.HIGH)
    if critical:
        result.root_cause = critical.message
        result.recommendation = critical.suggestion
        result.next_steps = list(NEXT_STEPS.get(critical.category, ()))
    elif high:
        result.root_cause = high.message
        result.recommendation = high.suggestion
    elif found:
        result.root_cause = MINOR_ROOT_CAUSE
        result.recommendation = MINOR_RECOMMENDATION
    else:
        result.root_cause = HEALTHY_ROOT_CAUSE
        result.recommendation = HEALTHY_RECOMMENDATION

    logger.debug("Root cause for %d issue(s): %s", len(found), result.root_cause)
    return result
