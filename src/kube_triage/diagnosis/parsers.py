"""Parse kubectl/oc output into Issues.

Every parser only appends to the findings it is given; nothing is merged or
removed. Output that matches no signature is skipped silently.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from kube_triage.diagnosis import catalog
from kube_triage.diagnosis.models import Issue, IssueSource, StepOutput, StepResult

logger = logging.getLogger(__name__)

_STATE_LINE = re.compile(r"^(?P<indent>\s*)(?:Last State|State):\s*(?P<state>\w+)(?P<rest>.*)$")
_COLUMN_GAP = re.compile(r"\s{2,}")


@dataclass
class Findings:
    """Accumulates what the parsers discover during one run."""

    pod_status: str = ""
    issues: list[Issue] = field(default_factory=list)

    def add(self, issue: Issue) -> None:
        self.issues.append(issue)


def event_message(line: str) -> str:
    """Return the MESSAGE column of an event row, or the whole row if it has no columns."""
    columns = _COLUMN_GAP.split(line.strip())
    if len(columns) >= 4:
        return columns[-1]
    return line.strip()


def parse_pod_status(output: str, findings: Findings) -> None:
    """Read STATUS and RESTARTS from `get pod` table output."""
    for line in output.splitlines():
        fields = line.split()
        if len(fields) < 3 or fields[0] == "NAME" or line.startswith("No resources found"):
            continue
        status = fields[2]
        findings.pod_status = status

        for sig in catalog.POD_STATUS_SIGNATURES:
            if sig.matches(status):
                findings.add(sig.issue(IssueSource.STATUS))
                break

        if len(fields) >= 4 and fields[3].isdigit() and int(fields[3]) > 0:
            sig = catalog.RESTART_SIGNATURE
            findings.add(sig.issue(IssueSource.STATUS, sig.message.format(restarts=fields[3])))


def _check_container_state(state: str, text: str, findings: Findings) -> None:
    if state == "waiting":
        for sig in catalog.WAITING_SIGNATURES:
            if sig.matches(text):
                findings.add(sig.issue(IssueSource.DESCRIBE))
                break
    elif state == "terminated":
        for sig in catalog.TERMINATED_SIGNATURES:
            if sig.matches(text):
                findings.add(sig.issue(IssueSource.DESCRIBE))
                break
        m = catalog.EXIT_CODE_PATTERN.search(text)
        if m and m.group(1) != "0":
            sig = catalog.NONZERO_EXIT_SIGNATURE
            findings.add(sig.issue(IssueSource.DESCRIBE, sig.message.format(exit_code=m.group(1))))


def parse_describe(output: str, findings: Findings) -> None:
    """Scan container state blocks and the Events section of `describe pod` output."""
    in_events = False
    state: str | None = None
    state_indent = 0

    for line in output.splitlines():
        stripped = line.strip()
        if stripped.startswith("Events:"):
            in_events = True
            state = None
            continue

        if in_events:
            if catalog.DESCRIBE_EVENT_SIGNATURE.matches(stripped):
                findings.add(catalog.DESCRIBE_EVENT_SIGNATURE.issue(IssueSource.EVENTS, event_message(stripped)))
            continue

        m = _STATE_LINE.match(line)
        if m:
            state = m.group("state").lower()
            state_indent = len(m.group("indent"))
            # Single-line renderings carry the reason on the state line itself.
            if m.group("rest").strip():
                _check_container_state(state, m.group("rest"), findings)
            continue

        if state is None or not stripped:
            continue
        if len(line) - len(line.lstrip()) > state_indent:
            _check_container_state(state, stripped, findings)
        else:
            state = None


def parse_events(output: str, findings: Findings) -> None:
    """Flag Warning/Error rows of `get events` output."""
    sig = catalog.EVENT_LINE_SIGNATURE
    for line in output.splitlines():
        if "LAST SEEN" in line or not line.strip():
            continue
        if sig.matches(line):
            findings.add(sig.issue(IssueSource.EVENTS, event_message(line)))


def parse_logs(output: str, findings: Findings, stream: str = "current") -> None:
    """Match each log line against the ordered log signatures, first match only."""
    if catalog.NO_PREVIOUS_LOGS in output:
        return
    for line in output.splitlines():
        text = line.strip()
        if not text:
            continue
        for sig in catalog.LOG_SIGNATURES:
            if sig.matches(text):
                findings.add(sig.issue(IssueSource.LOGS, f"Found in {stream} logs: {text}"))
                break


def parse_step_output(kind: StepOutput, result: StepResult, findings: Findings) -> None:
    """Route a successful step result to the parser for its output kind."""
    if not result.succeeded:
        logger.debug("Skipping parse of failed step: %s", result.command)
        return
    if kind == StepOutput.POD_STATUS:
        parse_pod_status(result.output, findings)
    elif kind == StepOutput.DESCRIBE:
        parse_describe(result.output, findings)
    elif kind == StepOutput.EVENTS:
        parse_events(result.output, findings)
    elif kind == StepOutput.LOGS:
        parse_logs(result.output, findings, "current")
    elif kind == StepOutput.PREVIOUS_LOGS:
        parse_logs(result.output, findings, "previous")
