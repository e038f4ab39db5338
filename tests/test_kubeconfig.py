"""Cluster access resolution via the kubernetes client's config loaders."""

from __future__ import annotations

from pathlib import Path

import pytest
from kubernetes import config

from kube_triage.execution.kubeconfig import ClusterAccess, resolve_cluster_access


def _not_in_cluster() -> None:
    raise config.ConfigException("Service host/port is not set.")


def test_in_cluster_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_incluster_config", lambda: None)
    access = resolve_cluster_access(kubeconfig="/tmp/kc", context="dev")
    assert access.in_cluster is True
    assert access.cli_flags() == []


def test_kubeconfig_fallback_reports_active_context(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict = {}

    def _contexts(**kwargs):
        seen.update(kwargs)
        return [{"name": "dev"}, {"name": "prod"}], {"name": "prod"}

    monkeypatch.setattr(config, "load_incluster_config", _not_in_cluster)
    monkeypatch.setattr(config, "list_kube_config_contexts", _contexts)
    access = resolve_cluster_access(kubeconfig="~/kc")
    assert access.in_cluster is False
    assert access.kubeconfig == Path("~/kc").expanduser()
    assert access.context is None
    assert access.active_context == "prod"
    assert seen == {"config_file": str(Path("~/kc").expanduser())}
    assert access.cli_flags() == ["--kubeconfig", str(Path("~/kc").expanduser())]


def test_explicit_context_is_used(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_incluster_config", _not_in_cluster)
    access = resolve_cluster_access(context="staging")
    assert access.active_context == "staging"
    assert access.cli_flags() == ["--context", "staging"]


def test_missing_kubeconfig_is_not_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_config(**kwargs):
        raise config.ConfigException("Invalid kube-config file. No configuration found.")

    monkeypatch.setattr(config, "load_incluster_config", _not_in_cluster)
    monkeypatch.setattr(config, "list_kube_config_contexts", _no_config)
    access = resolve_cluster_access()
    assert access == ClusterAccess(in_cluster=False)
    assert access.cli_flags() == []
