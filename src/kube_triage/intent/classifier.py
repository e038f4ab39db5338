"""Decide whether a query needs diagnostics and which workflow family applies."""

from __future__ import annotations

import logging
import re

from kube_triage.diagnosis.models import Classification, WorkflowType

logger = logging.getLogger(__name__)

# Network tool vocabulary. Single words match on word boundaries only.
NETWORK_KEYWORDS: tuple[str, ...] = (
    "tcpdump", "packet capture", "network capture", "wireshark",
    "ping from pod", "connectivity test", "network test",
    "traceroute", "nslookup", "dig", "curl from pod",
    "network debug", "network troubleshoot", "capture packets",
    "network analysis", "packet analysis", "traffic capture",
    "dns resolution", "dns test", "http test", "https test",
    "netstat", "ss", "lsof", "netcat", "nc", "telnet",
    "network connections", "socket connections", "network routes",
)

POD_SYMPTOM_KEYWORDS: tuple[str, ...] = (
    "pod failing", "pod not working", "pod crash", "pod error",
    "pod stuck", "pod pending", "pod evicted", "pod terminating",
    "crashloopbackoff", "imagepullbackoff", "oomkilled",
    "pod status", "pod health", "pod issues", "pod problems",
    "why is pod", "what's wrong with", "check pod", "examine pod",
    "container creating", "containercreating", "stuck in container",
    "creating container", "pod initializing", "init container",
    "pulling image", "waiting for", "pod not starting",
    "troubleshoot pod", "debug pod", "diagnose pod",
)

# Single words match whole words only, so inflections are listed explicitly.
CRASH_WORDS: tuple[str, ...] = ("crash", "crashes", "crashed", "crashing", "crashloopbackoff")
FAILURE_WORDS: tuple[str, ...] = ("fail", "fails", "failed", "failing", "failure", "error", "errors")

# Tokens that, next to "pod", signal a troubleshooting request.
POD_CONTEXT_TOKENS: tuple[str, ...] = CRASH_WORDS + FAILURE_WORDS + (
    "not working", "stuck", "pending", "what's wrong", "why is", "why are",
    "troubleshoot pod", "debug pod",
)

DIAGNOSTIC_VERBS: tuple[str, ...] = (
    "troubleshoot", "troubleshooting", "debug", "debugging", "diagnose", "analyze", "check", "examine",
)

# Any of these plus "pod" selects full pod diagnostics over a network tool.
POD_DIAGNOSTIC_TRIGGERS: tuple[str, ...] = DIAGNOSTIC_VERBS + CRASH_WORDS + FAILURE_WORDS + (
    "issues", "why is", "why are", "stuck", "pending",
)

# Creation and RBAC requests are handled elsewhere unless a symptom is named.
RESOURCE_REQUEST_MARKERS: tuple[str, ...] = (
    "create", "apply", "service account", "serviceaccount",
    "admin access", "rolebinding", "role binding",
)

SYMPTOM_WORDS: tuple[str, ...] = CRASH_WORDS + FAILURE_WORDS + (
    "not working", "stuck", "pending", "why is", "what's wrong",
    "troubleshoot", "troubleshooting", "debug", "diagnose",
)

# (workflow, keywords, vetoes), checked in order.
WORKFLOW_RULES: tuple[tuple[WorkflowType, tuple[str, ...], tuple[str, ...]], ...] = (
    (WorkflowType.TCPDUMP, ("tcpdump", "packet capture", "capture packets", "traffic capture", "wireshark"), ()),
    (WorkflowType.PING, ("ping",), ("troubleshoot", "troubleshooting")),
    (WorkflowType.DNS, ("dns", "nslookup", "dig"), ()),
    (WorkflowType.HTTP, ("curl",), ()),
    (WorkflowType.HTTP, ("http", "https"), ("troubleshoot", "troubleshooting")),
    (WorkflowType.NETSTAT, ("netstat", "ss", "lsof", "network connections", "socket connections"), ("general",)),
)

_PUNCTUATION = ".,!?;:-'\"()[]"


def _normalize(query: str) -> str:
    return re.sub(r"\s+", " ", (query or "").strip().lower())


def contains_keyword(text: str, keyword: str) -> bool:
    """Whole-word match; multi-word phrases must also start and end on word boundaries."""
    if " " in keyword:
        return re.search(rf"(?<!\w){re.escape(keyword)}(?!\w)", text) is not None
    return any(word.strip(_PUNCTUATION) == keyword for word in text.split())


def _any_keyword(text: str, keywords: tuple[str, ...]) -> bool:
    return any(contains_keyword(text, k) for k in keywords)


def _mentions_pod(text: str) -> bool:
    return contains_keyword(text, "pod") or contains_keyword(text, "pods")


def is_resource_request(query: str) -> bool:
    """True for create/apply/RBAC requests that name no symptom."""
    text = _normalize(query)
    if not _any_keyword(text, RESOURCE_REQUEST_MARKERS):
        return False
    return not _any_keyword(text, SYMPTOM_WORDS)


def is_diagnostic_query(query: str) -> bool:
    text = _normalize(query)
    if is_resource_request(text):
        return False
    if _any_keyword(text, NETWORK_KEYWORDS) or _any_keyword(text, POD_SYMPTOM_KEYWORDS):
        return True
    if not _mentions_pod(text):
        return False
    return _any_keyword(text, POD_CONTEXT_TOKENS) or _any_keyword(text, DIAGNOSTIC_VERBS)


def determine_workflow(query: str) -> WorkflowType:
    """Pick the workflow family; diagnostic verbs about a pod win over network tools."""
    text = _normalize(query)
    if _mentions_pod(text) and _any_keyword(text, POD_DIAGNOSTIC_TRIGGERS):
        return WorkflowType.POD_DIAGNOSTICS
    for workflow, keywords, vetoes in WORKFLOW_RULES:
        if _any_keyword(text, keywords) and not _any_keyword(text, vetoes):
            return workflow
    return WorkflowType.GENERAL


def classify(query: str) -> Classification:
    """Classify a free-form query; non-diagnostic queries always report ``general``."""
    if not is_diagnostic_query(query):
        logger.debug("Query is not diagnostic: %r", query)
        return Classification(is_diagnostic=False, workflow=WorkflowType.GENERAL)
    workflow = determine_workflow(query)
    logger.debug("Classified %r as %s", query, workflow.value)
    return Classification(is_diagnostic=True, workflow=workflow)
