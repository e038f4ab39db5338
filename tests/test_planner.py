"""Workflow planning: step order and generated commands."""

from __future__ import annotations

import pytest

from kube_triage.diagnosis.models import StepOutput, Target, WorkflowType
from kube_triage.workflow.planner import PLANNERS, PlanOptions, plan


@pytest.fixture
def httpd() -> Target:
    return Target(resource_name="httpd", namespace="app1", found=True)


def test_every_workflow_has_a_planner() -> None:
    assert set(PLANNERS) == set(WorkflowType)


def test_pod_diagnostics_with_target(httpd: Target) -> None:
    steps = plan(WorkflowType.POD_DIAGNOSTICS, httpd)
    assert [s.command for s in steps] == [
        "kubectl get pod httpd -n app1 -o wide",
        "kubectl describe pod httpd -n app1",
        "kubectl get events --field-selector involvedObject.name=httpd -n app1 --sort-by='.lastTimestamp'",
        "kubectl logs httpd -n app1 --tail=50",
        "kubectl logs httpd -n app1 --previous --tail=50 2>/dev/null || echo 'No previous logs available'",
    ]
    assert [s.output for s in steps] == [
        StepOutput.POD_STATUS,
        StepOutput.DESCRIBE,
        StepOutput.EVENTS,
        StepOutput.LOGS,
        StepOutput.PREVIOUS_LOGS,
    ]
    assert [s.ordinal for s in steps] == [1, 2, 3, 4, 5]


def test_pod_diagnostics_without_target_lists_first() -> None:
    steps = plan(WorkflowType.POD_DIAGNOSTICS, Target())
    assert [s.command for s in steps] == [
        "kubectl get pods -n default",
        "kubectl get pods -n default -o wide",
    ]
    # The same table is listed twice; only the first listing is parsed for status.
    assert [s.output for s in steps] == [StepOutput.POD_STATUS, StepOutput.RAW]


@pytest.mark.parametrize(
    "workflow",
    [WorkflowType.TCPDUMP, WorkflowType.PING, WorkflowType.DNS, WorkflowType.HTTP, WorkflowType.NETSTAT],
)
def test_network_workflows_without_target_list_pods(workflow: WorkflowType) -> None:
    steps = plan(workflow, Target(namespace="prod"))
    assert len(steps) == 1
    assert steps[0].command == "kubectl get pods -n prod"


def test_options_shape_commands(httpd: Target) -> None:
    opts = PlanOptions(cli="oc", log_tail_lines=200)
    steps = plan(WorkflowType.POD_DIAGNOSTICS, httpd, opts)
    assert all(s.command.startswith("oc ") for s in steps)
    assert steps[3].command.endswith("--tail=200")


def test_default_namespace_from_options() -> None:
    steps = plan(WorkflowType.PING, Target(resource_name="web", found=True), PlanOptions(default_namespace="edge"))
    assert steps[0].command == "kubectl exec web -n edge -- ping -c 3 8.8.8.8"
    assert steps[1].command == "kubectl exec web -n edge -- nslookup kubernetes.default.svc.cluster.local"


def test_tcpdump_uses_target_capture_parameters() -> None:
    target = Target(resource_name="web", namespace="prod", interface="eth0", filter="port 80", duration="30s", found=True)
    steps = plan(WorkflowType.TCPDUMP, target)
    assert steps[0].command == "kubectl get pod web -n prod -o wide"
    assert steps[1].command == "kubectl exec web -n prod -- timeout 30s tcpdump -i eth0 -nn -c 100 port 80"


def test_tcpdump_falls_back_to_configured_capture(httpd: Target) -> None:
    steps = plan(WorkflowType.TCPDUMP, httpd, PlanOptions(capture_interface="any", capture_duration="15s"))
    assert steps[1].command == "kubectl exec httpd -n app1 -- timeout 15s tcpdump -i any -nn -c 100"


def test_dns_steps(httpd: Target) -> None:
    commands = [s.command for s in plan(WorkflowType.DNS, httpd)]
    assert commands == [
        "kubectl exec httpd -n app1 -- cat /etc/resolv.conf",
        "kubectl exec httpd -n app1 -- nslookup kubernetes.default.svc.cluster.local",
        "kubectl exec httpd -n app1 -- nslookup google.com",
    ]


def test_http_and_netstat_steps(httpd: Target) -> None:
    assert [s.command for s in plan(WorkflowType.HTTP, httpd)] == [
        "kubectl exec httpd -n app1 -- curl -I http://httpbin.org/get",
        "kubectl exec httpd -n app1 -- curl -I https://httpbin.org/get",
    ]
    assert [s.command for s in plan(WorkflowType.NETSTAT, httpd)] == [
        "kubectl exec httpd -n app1 -- netstat -tulpn",
        "kubectl exec httpd -n app1 -- ip addr show",
    ]


def test_general_adds_describe_only_with_target(httpd: Target) -> None:
    assert len(plan(WorkflowType.GENERAL, Target())) == 2
    steps = plan(WorkflowType.GENERAL, httpd)
    assert len(steps) == 3
    assert steps[2].command == "kubectl describe pod httpd -n app1"
