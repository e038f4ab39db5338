"""Step execution boundary and the subprocess-backed executor used by the CLI."""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
import time
from datetime import datetime, timezone
from typing import Protocol

from kube_triage.diagnosis.models import StepResult
from kube_triage.execution.kubeconfig import ClusterAccess

logger = logging.getLogger(__name__)

ALLOWED_COMMANDS: frozenset[str] = frozenset({
    "kubectl", "oc", "helm", "docker", "podman",
    "curl", "ping", "nslookup", "dig", "telnet",
    "cat", "grep", "awk", "sed", "head", "tail", "echo",
})

DANGEROUS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\brm\s+-rf\b"),
    re.compile(r"\bdd\s+if="),
    re.compile(r"\b(mkfs|fdisk|parted)\b"),
    re.compile(r"\b(shutdown|reboot|halt|poweroff)\b"),
    re.compile(r"\b(passwd|sudo)\b"),
    re.compile(r"\bsu\s+-"),
    re.compile(r"\bchmod\s+777\b"),
    re.compile(r">\s*/dev/(?!null\b)"),
    re.compile(r"\b(curl|wget)\b.*\|\s*(ba|z)?sh\b"),
)

SHELL_OPERATORS: tuple[str, ...] = ("|", "&&", "||", ">", "<", ";")
CLUSTER_CLIS = frozenset({"kubectl", "oc"})

REJECTED_MESSAGE = "Command rejected for security reasons"
TIMEOUT_EXIT_CODE = 124
NOT_FOUND_EXIT_CODE = 127


class StepExecutor(Protocol):
    """Runs one command and reports its outcome; never raises for command failures."""

    def execute(self, command: str) -> StepResult: ...


def is_command_safe(command: str) -> bool:
    """Allow-listed binary and no dangerous pattern anywhere in the command."""
    parts = command.strip().split()
    if not parts or parts[0] not in ALLOWED_COMMANDS:
        return False
    lowered = command.lower()
    for pattern in DANGEROUS_PATTERNS:
        if pattern.search(lowered):
            logger.warning("Blocked dangerous command pattern: %s", pattern.pattern)
            return False
    return True


def needs_shell(command: str) -> bool:
    return any(op in command for op in SHELL_OPERATORS)


class SubprocessExecutor:
    """Execute commands locally with a timeout, injecting cluster access flags."""

    def __init__(self, access: ClusterAccess | None = None, timeout: float = 30.0) -> None:
        self.access = access or ClusterAccess(in_cluster=True)
        self.timeout = timeout

    def prepare(self, command: str) -> str:
        """Insert --kubeconfig/--context after kubectl/oc unless already present."""
        parts = command.strip().split(" ", 1)
        if parts[0] not in CLUSTER_CLIS or "--kubeconfig" in command:
            return command
        flags = self.access.cli_flags()
        if not flags:
            return command
        return " ".join([parts[0], *(shlex.quote(f) for f in flags), *parts[1:]])

    def execute(self, command: str) -> StepResult:
        started = datetime.now(timezone.utc)
        t0 = time.monotonic()

        def _result(output: str = "", exit_code: int = 0, error: str | None = None) -> StepResult:
            return StepResult(
                command=command,
                output=output.strip(),
                exit_code=exit_code,
                error=error,
                duration_ms=int((time.monotonic() - t0) * 1000),
                timestamp=started,
            )

        if not is_command_safe(command):
            return _result(exit_code=1, error=REJECTED_MESSAGE)

        prepared = self.prepare(command)
        argv = ["/bin/bash", "-c", prepared] if needs_shell(prepared) else shlex.split(prepared)
        logger.debug("Executing command: %s", prepared)
        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            partial = e.output.decode(errors="replace") if isinstance(e.output, bytes) else (e.output or "")
            logger.warning("Command timed out after %ss: %s", self.timeout, command)
            return _result(partial, TIMEOUT_EXIT_CODE, f"command timed out after {self.timeout:g}s")
        except FileNotFoundError as e:
            logger.warning("Command not found: %s", e.filename or argv[0])
            return _result(exit_code=NOT_FOUND_EXIT_CODE, error=f"command not found: {e.filename or argv[0]}")
        except OSError as e:
            logger.warning("Failed to start command %r: %s", command, e)
            return _result(exit_code=1, error=str(e))

        if proc.returncode != 0:
            return _result(proc.stdout or "", proc.returncode, f"exit status {proc.returncode}")
        return _result(proc.stdout or "")
