"""Resolve how planned kubectl/oc commands reach the cluster."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from kubernetes import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClusterAccess:
    """In-cluster service account, or an explicit kubeconfig/context pair."""

    in_cluster: bool
    kubeconfig: Path | None = None
    context: str | None = None
    active_context: str | None = None

    def cli_flags(self) -> list[str]:
        """Flags to inject after the kubectl/oc binary; empty when in-cluster."""
        if self.in_cluster:
            return []
        flags: list[str] = []
        if self.kubeconfig:
            flags += ["--kubeconfig", str(self.kubeconfig)]
        if self.context:
            flags += ["--context", self.context]
        return flags


def _active_context(kubeconfig: Path | None) -> str | None:
    kwargs = {"config_file": str(kubeconfig)} if kubeconfig else {}
    try:
        _, active = config.list_kube_config_contexts(**kwargs)
    except config.ConfigException as e:
        logger.debug("No usable kubeconfig: %s", e)
        return None
    return (active or {}).get("name")


def resolve_cluster_access(kubeconfig: Path | str | None = None, context: str | None = None) -> ClusterAccess:
    """Prefer the in-cluster service account, fall back to kubeconfig."""
    try:
        config.load_incluster_config()
        logger.debug("Using in-cluster service account credentials")
        return ClusterAccess(in_cluster=True)
    except config.ConfigException:
        pass
    path = Path(kubeconfig).expanduser() if kubeconfig else None
    active = context or _active_context(path)
    logger.debug("Using kubeconfig %s (context=%s)", path or "<default>", active)
    return ClusterAccess(in_cluster=False, kubeconfig=path, context=context, active_context=active)
