"""CLI exit codes and output modes."""

from __future__ import annotations

import json

import pytest
from conftest import FakeExecutor

from kube_triage import main as cli
from kube_triage.agent.orchestrator import TroubleshootingEngine

QUERY = "troubleshoot the httpd pod in app1 namespace"


@pytest.fixture(autouse=True)
def _isolated(settings):
    return settings


def test_classify_only_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([QUERY, "--classify-only", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["classification"] == {"is_diagnostic": True, "workflow": "pod_diagnostics"}
    assert data["target"]["resource_name"] == "httpd"
    assert data["target"]["namespace"] == "app1"


def test_dry_run_json_lists_steps(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([QUERY, "--dry-run", "--json", "--cli", "oc"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["workflow_type"] == "pod_diagnostics"
    assert len(data["steps"]) == 5
    assert data["steps"][0]["command"] == "oc get pod httpd -n app1 -o wide"


def test_run_exit_codes(monkeypatch: pytest.MonkeyPatch, crashloop_executor: FakeExecutor) -> None:
    monkeypatch.setattr(TroubleshootingEngine, "executor", property(lambda self: crashloop_executor))
    assert cli.main([QUERY]) == 0

    failing = FakeExecutor(fail_all=True)
    monkeypatch.setattr(TroubleshootingEngine, "executor", property(lambda self: failing))
    assert cli.main([QUERY]) == 1


def test_unexpected_error_returns_2(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def _explode(self, query):
        raise RuntimeError("kaboom")

    monkeypatch.setattr(TroubleshootingEngine, "run", _explode)
    assert cli.main([QUERY]) == 2
    assert "Error: kaboom" in capsys.readouterr().err
