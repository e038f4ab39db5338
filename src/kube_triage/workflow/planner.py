"""Turn a workflow family and target into an ordered list of inspection steps."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from kube_triage.diagnosis.models import StepOutput, Target, WorkflowStep, WorkflowType

logger = logging.getLogger(__name__)

PING_ADDRESS = "8.8.8.8"
CLUSTER_DNS_NAME = "kubernetes.default.svc.cluster.local"
EXTERNAL_DNS_NAME = "google.com"
HTTP_PROBE_URL = "httpbin.org/get"
CAPTURE_PACKET_LIMIT = 100


@dataclass(frozen=True)
class PlanOptions:
    """Knobs that shape the generated commands."""

    cli: str = "kubectl"
    default_namespace: str = "default"
    log_tail_lines: int = 50
    capture_interface: str = "any"
    capture_duration: str = "15s"


def _steps(*specs: tuple[str, str, str, StepOutput]) -> list[WorkflowStep]:
    return [
        WorkflowStep(ordinal=i, description=d, command=c, purpose=p, output=o)
        for i, (d, c, p, o) in enumerate(specs, start=1)
    ]


def _exec(opts: PlanOptions, pod: str, namespace: str, command: str) -> str:
    return f"{opts.cli} exec {pod} -n {namespace} -- {command}"


def _list_pods_step(opts: PlanOptions, namespace: str, description: str, purpose: str) -> list[WorkflowStep]:
    return _steps((description, f"{opts.cli} get pods -n {namespace}", purpose, StepOutput.POD_STATUS))


def plan_pod_diagnostics(target: Target, opts: PlanOptions) -> list[WorkflowStep]:
    cli = opts.cli
    namespace = target.namespace_or_default(opts.default_namespace)
    if not target.found:
        return _steps(
            (
                "List all pods to identify problematic pods",
                f"{cli} get pods -n {namespace}",
                "Identify pods with issues (CrashLoopBackOff, ImagePullBackOff, etc.)",
                StepOutput.POD_STATUS,
            ),
            (
                "Get detailed pod status for all pods",
                f"{cli} get pods -n {namespace} -o wide",
                "Get detailed status, restarts, and node information",
                StepOutput.RAW,
            ),
        )
    pod = target.resource_name
    tail = opts.log_tail_lines
    return _steps(
        (
            "Get pod status and basic information",
            f"{cli} get pod {pod} -n {namespace} -o wide",
            "Check current status, restarts, and node assignment",
            StepOutput.POD_STATUS,
        ),
        (
            "Get detailed pod diagnostics",
            f"{cli} describe pod {pod} -n {namespace}",
            "Analyze events, conditions, and container states for root cause",
            StepOutput.DESCRIBE,
        ),
        (
            "Get recent events for the pod",
            f"{cli} get events --field-selector involvedObject.name={pod} -n {namespace} "
            "--sort-by='.lastTimestamp'",
            "Check for recent events that might explain the issue",
            StepOutput.EVENTS,
        ),
        (
            "Get current pod logs",
            f"{cli} logs {pod} -n {namespace} --tail={tail}",
            "Check application logs for errors or crash information",
            StepOutput.LOGS,
        ),
        (
            "Get previous pod logs (if restarted)",
            f"{cli} logs {pod} -n {namespace} --previous --tail={tail} 2>/dev/null "
            "|| echo 'No previous logs available'",
            "Check logs from previous container instance to understand crashes",
            StepOutput.PREVIOUS_LOGS,
        ),
    )


def plan_tcpdump(target: Target, opts: PlanOptions) -> list[WorkflowStep]:
    namespace = target.namespace_or_default(opts.default_namespace)
    if not target.found:
        return _list_pods_step(
            opts, namespace,
            "List pods to identify target",
            "Find the correct pod name for packet capture",
        )
    pod = target.resource_name
    interface = target.interface or opts.capture_interface
    duration = target.duration or opts.capture_duration
    capture = f"timeout {duration} tcpdump -i {interface} -nn -c {CAPTURE_PACKET_LIMIT}"
    if target.filter:
        capture += f" {target.filter}"
    return _steps(
        (
            "Verify pod exists and get details",
            f"{opts.cli} get pod {pod} -n {namespace} -o wide",
            "Confirm pod is running and get node information",
            StepOutput.POD_STATUS,
        ),
        (
            "Capture packets in the pod's network namespace",
            _exec(opts, pod, namespace, capture),
            f"Capture up to {CAPTURE_PACKET_LIMIT} packets on {interface} for {duration}",
            StepOutput.RAW,
        ),
    )


def plan_ping(target: Target, opts: PlanOptions) -> list[WorkflowStep]:
    namespace = target.namespace_or_default(opts.default_namespace)
    if not target.found:
        return _list_pods_step(
            opts, namespace,
            "List pods for connectivity testing",
            "Find pods to test connectivity",
        )
    pod = target.resource_name
    return _steps(
        (
            "Test basic pod connectivity",
            _exec(opts, pod, namespace, f"ping -c 3 {PING_ADDRESS}"),
            "Test external connectivity",
            StepOutput.RAW,
        ),
        (
            "Test DNS resolution",
            _exec(opts, pod, namespace, f"nslookup {CLUSTER_DNS_NAME}"),
            "Test internal DNS resolution",
            StepOutput.RAW,
        ),
    )


def plan_dns(target: Target, opts: PlanOptions) -> list[WorkflowStep]:
    namespace = target.namespace_or_default(opts.default_namespace)
    if not target.found:
        return _list_pods_step(
            opts, namespace,
            "List pods for DNS testing",
            "Find pods to test DNS resolution",
        )
    pod = target.resource_name
    return _steps(
        (
            "Test DNS configuration",
            _exec(opts, pod, namespace, "cat /etc/resolv.conf"),
            "Check DNS server configuration",
            StepOutput.RAW,
        ),
        (
            "Test internal DNS resolution",
            _exec(opts, pod, namespace, f"nslookup {CLUSTER_DNS_NAME}"),
            "Test cluster internal DNS",
            StepOutput.RAW,
        ),
        (
            "Test external DNS resolution",
            _exec(opts, pod, namespace, f"nslookup {EXTERNAL_DNS_NAME}"),
            "Test external DNS resolution",
            StepOutput.RAW,
        ),
    )


def plan_http(target: Target, opts: PlanOptions) -> list[WorkflowStep]:
    namespace = target.namespace_or_default(opts.default_namespace)
    if not target.found:
        return _list_pods_step(
            opts, namespace,
            "List pods for HTTP testing",
            "Find pods to test HTTP connectivity",
        )
    pod = target.resource_name
    return _steps(
        (
            "Test HTTP connectivity to external service",
            _exec(opts, pod, namespace, f"curl -I http://{HTTP_PROBE_URL}"),
            "Test external HTTP connectivity",
            StepOutput.RAW,
        ),
        (
            "Test HTTPS connectivity",
            _exec(opts, pod, namespace, f"curl -I https://{HTTP_PROBE_URL}"),
            "Test external HTTPS connectivity",
            StepOutput.RAW,
        ),
    )


def plan_netstat(target: Target, opts: PlanOptions) -> list[WorkflowStep]:
    namespace = target.namespace_or_default(opts.default_namespace)
    if not target.found:
        return _list_pods_step(
            opts, namespace,
            "List pods for network analysis",
            "Find pods to analyze network connections",
        )
    pod = target.resource_name
    return _steps(
        (
            "Show network connections",
            _exec(opts, pod, namespace, "netstat -tulpn"),
            "Display active network connections and listening ports",
            StepOutput.RAW,
        ),
        (
            "Show network interfaces",
            _exec(opts, pod, namespace, "ip addr show"),
            "Display network interface configuration",
            StepOutput.RAW,
        ),
    )


def plan_general(target: Target, opts: PlanOptions) -> list[WorkflowStep]:
    cli = opts.cli
    namespace = target.namespace_or_default(opts.default_namespace)
    specs = [
        (
            "List pods and their status",
            f"{cli} get pods -n {namespace} -o wide",
            "Get overview of pods and their network configuration",
            StepOutput.POD_STATUS,
        ),
        (
            "List services",
            f"{cli} get svc -n {namespace}",
            "Check available services and their endpoints",
            StepOutput.RAW,
        ),
    ]
    if target.found:
        specs.append(
            (
                "Describe specific pod networking",
                f"{cli} describe pod {target.resource_name} -n {namespace}",
                "Get detailed pod network information",
                StepOutput.DESCRIBE,
            )
        )
    return _steps(*specs)


Planner = Callable[[Target, PlanOptions], list[WorkflowStep]]

PLANNERS: dict[WorkflowType, Planner] = {
    WorkflowType.POD_DIAGNOSTICS: plan_pod_diagnostics,
    WorkflowType.TCPDUMP: plan_tcpdump,
    WorkflowType.PING: plan_ping,
    WorkflowType.DNS: plan_dns,
    WorkflowType.HTTP: plan_http,
    WorkflowType.NETSTAT: plan_netstat,
    WorkflowType.GENERAL: plan_general,
}


def plan(workflow: WorkflowType, target: Target, opts: PlanOptions | None = None) -> list[WorkflowStep]:
    """Return the ordered steps for a workflow family."""
    options = opts or PlanOptions()
    steps = PLANNERS[workflow](target, options)
    logger.debug("Planned %d step(s) for %s workflow", len(steps), workflow.value)
    return steps
