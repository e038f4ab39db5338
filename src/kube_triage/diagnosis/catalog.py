"""Known-issue signatures, kept as ordered data so they can be tested and extended.

Order is significant in every table: the first matching entry wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from kube_triage.diagnosis.models import Category, Issue, IssueKind, IssueSource, Severity


@dataclass(frozen=True)
class Signature:
    """A pattern plus the Issue fields it produces."""

    pattern: re.Pattern[str]
    kind: IssueKind
    severity: Severity
    category: Category
    message: str
    suggestion: str
    actionable: bool = True

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def issue(self, source: IssueSource, message: str | None = None) -> Issue:
        return Issue(
            kind=self.kind,
            source=source,
            message=message or self.message,
            severity=self.severity,
            category=self.category,
            actionable=self.actionable,
            suggestion=self.suggestion,
        )


def _sig(pattern: str, kind: IssueKind, severity: Severity, category: Category,
         message: str, suggestion: str, actionable: bool = True, flags: int = 0) -> Signature:
    return Signature(re.compile(pattern, flags), kind, severity, category, message, suggestion, actionable)


# STATUS column of `get pod` output.
POD_STATUS_SIGNATURES: tuple[Signature, ...] = (
    _sig(r"CrashLoopBackOff", IssueKind.ERROR, Severity.CRITICAL, Category.STABILITY,
         "Pod is in CrashLoopBackOff state",
         "Check application logs for crash reasons"),
    _sig(r"ImagePullBackOff|ErrImagePull", IssueKind.ERROR, Severity.CRITICAL, Category.IMAGE,
         "Cannot pull container image",
         "Verify image name, tag, and registry access"),
    _sig(r"Pending", IssueKind.WARNING, Severity.HIGH, Category.SCHEDULING,
         "Pod is stuck in Pending state",
         "Check node resources and scheduling constraints"),
    _sig(r"Terminating", IssueKind.INFO, Severity.MEDIUM, Category.LIFECYCLE,
         "Pod is terminating",
         "Wait for graceful shutdown or check for stuck processes",
         actionable=False),
    _sig(r"ContainerCreating", IssueKind.WARNING, Severity.HIGH, Category.SCHEDULING,
         "Pod is stuck in ContainerCreating state",
         "Check image pull progress, node resources, and storage availability"),
)

RESTART_SIGNATURE = _sig(
    r".", IssueKind.WARNING, Severity.MEDIUM, Category.STABILITY,
    "Pod has restarted {restarts} times",
    "Check pod logs and events for crash reasons",
)

# Reasons inside a `State: Waiting` block of `describe pod`.
WAITING_SIGNATURES: tuple[Signature, ...] = (
    _sig(r"ImagePullBackOff|ErrImagePull", IssueKind.ERROR, Severity.CRITICAL, Category.IMAGE,
         "Container waiting due to image pull failure",
         "Check image registry credentials and image availability"),
    _sig(r"CrashLoopBackOff", IssueKind.ERROR, Severity.CRITICAL, Category.STABILITY,
         "Container in crash loop",
         "Examine application logs for startup failures"),
)

# Reasons inside a `State/Last State: Terminated` block.
TERMINATED_SIGNATURES: tuple[Signature, ...] = (
    _sig(r"OOMKilled", IssueKind.ERROR, Severity.HIGH, Category.COMPUTE,
         "Container was killed due to out of memory",
         "Increase memory limits or optimize application memory usage"),
)

EXIT_CODE_PATTERN = re.compile(r"Exit Code:\s*(\d+)")

NONZERO_EXIT_SIGNATURE = _sig(
    r".", IssueKind.ERROR, Severity.HIGH, Category.STABILITY,
    "Container exited with non-zero code: {exit_code}",
    "Check application logs for error details",
)

DESCRIBE_EVENT_SIGNATURE = _sig(
    r"\bWarning\b", IssueKind.WARNING, Severity.MEDIUM, Category.EVENTS,
    "Warning event",
    "Review the specific failure details",
)

EVENT_LINE_SIGNATURE = _sig(
    r"Warning|Error", IssueKind.WARNING, Severity.MEDIUM, Category.EVENTS,
    "Warning event",
    "Review event details for context",
)

# Application log lines; only the first matching signature is recorded per line.
LOG_SIGNATURES: tuple[Signature, ...] = (
    _sig(r"(error|exception|fatal|panic|crash)", IssueKind.ERROR, Severity.HIGH, Category.APPLICATION,
         "Application error in logs", "Fix application error", flags=re.I),
    _sig(r"(out of memory|\boom|memory exceeded)", IssueKind.ERROR, Severity.HIGH, Category.COMPUTE,
         "Memory exhaustion in logs", "Increase memory limits", flags=re.I),
    _sig(r"(connection refused|connection timeout|connection timed out|network unreachable)",
         IssueKind.ERROR, Severity.MEDIUM, Category.NETWORK,
         "Network failure in logs", "Check network connectivity", flags=re.I),
    _sig(r"(permission denied|access denied|unauthorized)", IssueKind.ERROR, Severity.MEDIUM, Category.CONFIG,
         "Permission failure in logs", "Check RBAC and permissions", flags=re.I),
    _sig(r"(disk|storage|volume|mount.*fail)", IssueKind.ERROR, Severity.MEDIUM, Category.STORAGE,
         "Storage failure in logs", "Check storage configuration", flags=re.I),
)

NO_PREVIOUS_LOGS = "No previous logs available"

# Follow-up checklists for the category of a critical root cause.
NEXT_STEPS: dict[Category, tuple[str, ...]] = {
    Category.IMAGE: (
        "Verify the container image name and tag are correct",
        "Check if the image registry is accessible",
        "Verify image pull secrets if using private registry",
        "Test image pull manually: kubectl debug node/<node> -it --image=<image>",
    ),
    Category.STABILITY: (
        "Examine pod logs for startup errors: kubectl logs <pod> -n <namespace>",
        "Check resource limits and requests",
        "Verify application health check endpoints",
        "Review application configuration and dependencies",
    ),
    Category.COMPUTE: (
        "Increase memory limits in pod specification",
        "Analyze memory usage patterns in the application",
        "Consider using horizontal pod autoscaling",
        "Review application memory optimization opportunities",
    ),
    Category.SCHEDULING: (
        "Check if container image is accessible: kubectl describe pod <pod> -n <namespace>",
        "Verify node has sufficient resources (CPU, memory, disk space)",
        "Check if persistent volumes are available and accessible",
        "Review pod events for specific error messages",
        "Verify image pull secrets are correctly configured",
        "Check if any admission controllers are blocking pod creation",
    ),
}
