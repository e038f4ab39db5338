"""Pull resource identifiers out of free-text queries.

Pod patterns are tried in order and the first acceptable match wins. The more
specific shapes ("<pod> pod in <ns> namespace") must stay ahead of the generic
ones ("<pod> pod"), otherwise the namespace token gets swallowed as noise.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from kube_triage.diagnosis.models import Target

_NAME = r"([a-z0-9](?:[a-z0-9.\-]*[a-z0-9])?)"

# Words that look like names in the patterns below but never are.
STOPWORDS = frozenset({
    "a", "an", "the", "this", "that", "my", "our", "any", "all", "every", "each",
    "in", "on", "for", "with", "which", "and", "or", "of", "to", "from", "is", "are",
    "named", "called", "its", "it", "why", "what", "how", "whats",
    "troubleshoot", "debug", "diagnose", "analyze", "check", "examine", "inspect",
    "status", "health", "issue", "issues", "problem", "problems", "logs", "events",
    "failing", "crashing", "crashed", "stuck", "pending", "running", "restarting",
    "not", "networking", "network", "namespace", "pod", "pods", "container",
})


class _PodPattern(NamedTuple):
    name: str
    regex: re.Pattern[str]
    pod_group: int
    ns_group: int | None


POD_PATTERNS: tuple[_PodPattern, ...] = (
    _PodPattern(
        "pod-in-namespace",
        re.compile(rf"\b(?:the\s+)?{_NAME}\s+pod\s+in\s+(?:the\s+)?{_NAME}\s+namespace", re.I),
        1, 2,
    ),
    _PodPattern(
        "pod-in-explicit-namespace",
        re.compile(rf"\bpod\s+{_NAME}\s+in\s+(?:the\s+)?namespace\s+{_NAME}", re.I),
        1, 2,
    ),
    _PodPattern(
        "pod-in",
        re.compile(rf"\bpod\s+{_NAME}\s+in\s+(?:the\s+)?{_NAME}", re.I),
        1, 2,
    ),
    _PodPattern(
        "namespace-slash-pod",
        re.compile(rf"(?<![\w./:-]){_NAME}/{_NAME}\b", re.I),
        2, 1,
    ),
    _PodPattern(
        "why-is",
        re.compile(rf"\bwhy\s+is\s+(?:the\s+)?{_NAME}\s+pod\b", re.I),
        1, None,
    ),
    _PodPattern(
        "pod-name",
        re.compile(rf"\bpod\s+(?:named\s+|called\s+)?{_NAME}", re.I),
        1, None,
    ),
    _PodPattern(
        "name-pod",
        re.compile(rf"\b{_NAME}\s+pod\b", re.I),
        1, None,
    ),
)

NAMESPACE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\bin\s+(?:the\s+)?{_NAME}\s+namespace", re.I),
    re.compile(rf"\bnamespace\s+(?:named\s+|called\s+)?{_NAME}", re.I),
    re.compile(rf"(?:^|\s)(?:-n|--namespace)[\s=]+{_NAME}", re.I),
    re.compile(rf"\bns\s+{_NAME}", re.I),
    re.compile(rf"\bin\s+(?:the\s+)?{_NAME}", re.I),
)

INTERFACE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\binterface\s+([a-z0-9@.\-]+)", re.I),
    re.compile(r"(?:^|\s)-i\s+([a-z0-9@.\-]+)", re.I),
    re.compile(r"\b(eth\d+|ens\d+|veth[a-z0-9]*)\b", re.I),
)

_QUOTED_FILTER = re.compile(r"\bfilter\s+[\"']([^\"']+)[\"']", re.I)
_PORT = re.compile(r"\bport\s+(\d{1,5})\b", re.I)
_HOST = re.compile(r"\bhost\s+([a-z0-9.\-]+)", re.I)
_DURATION = re.compile(
    r"\b(?:for|duration)\s+(\d+)\s*(s|secs?|seconds?|m|mins?|minutes?)\b",
    re.I,
)
_POD_REFERENCE_PREFIXES = frozenset({"pod", "pods", "po"})


def _acceptable(name: str | None) -> bool:
    return bool(name) and name.lower() not in STOPWORDS


def extract_namespace(query: str) -> str | None:
    """Return the first namespace mention that is not a stop word."""
    for pattern in NAMESPACE_PATTERNS:
        for m in pattern.finditer(query):
            if _acceptable(m.group(1)):
                return m.group(1)
    return None


def _extract_pod(query: str) -> tuple[str | None, str | None]:
    for pattern in POD_PATTERNS:
        for m in pattern.regex.finditer(query):
            pod = m.group(pattern.pod_group)
            namespace = m.group(pattern.ns_group) if pattern.ns_group else None
            if pattern.name == "namespace-slash-pod" and namespace.lower() in _POD_REFERENCE_PREFIXES:
                namespace = None
            if not _acceptable(pod):
                continue
            if namespace is not None and not _acceptable(namespace):
                continue
            return pod, namespace
    return None, None


def extract_interface(query: str) -> str | None:
    for pattern in INTERFACE_PATTERNS:
        m = pattern.search(query)
        if m:
            return m.group(1)
    return None


def extract_filter(query: str) -> str | None:
    """Capture filter from an explicit quoted expression, or port/host mentions."""
    m = _QUOTED_FILTER.search(query)
    if m:
        return m.group(1).strip()
    parts = []
    port = _PORT.search(query)
    if port:
        parts.append(f"port {port.group(1)}")
    host = _HOST.search(query)
    if host:
        parts.append(f"host {host.group(1)}")
    return " and ".join(parts) or None


def extract_duration(query: str) -> str | None:
    m = _DURATION.search(query)
    if not m:
        return None
    unit = "m" if m.group(2).lower().startswith("m") else "s"
    return f"{int(m.group(1))}{unit}"


def extract(query: str) -> Target:
    """Extract a Target from a query. Pure: same query, same Target."""
    pod, namespace = _extract_pod(query)
    if namespace is None:
        namespace = extract_namespace(query)
    return Target(
        resource_name=pod,
        namespace=namespace,
        interface=extract_interface(query),
        filter=extract_filter(query),
        duration=extract_duration(query),
        found=pod is not None,
    )
