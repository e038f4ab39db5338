"""Execution layer: run planned commands against the cluster."""

from kube_triage.execution.executor import StepExecutor, SubprocessExecutor, is_command_safe
from kube_triage.execution.kubeconfig import ClusterAccess, resolve_cluster_access

__all__ = [
    "ClusterAccess",
    "StepExecutor",
    "SubprocessExecutor",
    "is_command_safe",
    "resolve_cluster_access",
]
