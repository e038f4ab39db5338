"""Shared fixtures: isolated settings and a fake executor replaying canned kubectl output."""

from __future__ import annotations

import pytest

from kube_triage.config import Settings
from kube_triage.diagnosis.models import StepResult

STATUS_CRASHLOOP = """\
NAME    READY   STATUS             RESTARTS   AGE   IP          NODE
httpd   0/1     CrashLoopBackOff   5          10m   10.0.0.12   node-1
"""

STATUS_IMAGEPULL = """\
NAME    READY   STATUS             RESTARTS   AGE   IP          NODE
web     0/1     ImagePullBackOff   0          2m    10.0.0.13   node-2
"""

STATUS_RUNNING = """\
NAME    READY   STATUS    RESTARTS   AGE   IP          NODE
api-0   1/1     Running   0          3d    10.0.0.14   node-1
"""

DESCRIBE_CRASHLOOP = """\
Name:         httpd
Namespace:    app1
Status:       Running
Containers:
  httpd:
    Container ID:   containerd://4f1c
    Image:          httpd:2.4
    State:          Waiting
      Reason:       CrashLoopBackOff
    Last State:     Terminated
      Reason:       Error
      Exit Code:    1
      Started:      Mon, 01 Jan 2024 10:00:00 +0000
    Ready:          False
    Restart Count:  5
Events:
  Type     Reason     Age                From               Message
  ----     ------     ----               ----               -------
  Normal   Scheduled  10m                default-scheduler  Successfully assigned app1/httpd to node-1
  Warning  BackOff    2m (x40 over 10m)  kubelet            Back-off restarting failed container
"""

EVENTS_CRASHLOOP = """\
LAST SEEN   TYPE      REASON    OBJECT      MESSAGE
10m         Normal    Pulled    pod/httpd   Container image "httpd:2.4" already present on machine
2m          Warning   BackOff   pod/httpd   Back-off restarting failed container
"""

LOGS_CRASHLOOP = """\
AH00558: httpd: Could not reliably determine the server's fully qualified domain name
[core:error] [pid 1] AH00015: Unable to open logs
"""

NO_PREVIOUS_LOGS = "No previous logs available"


class FakeExecutor:
    """Replays canned output keyed by a substring of the command; unmatched commands fail."""

    def __init__(self, responses: dict[str, str] | None = None, fail_all: bool = False) -> None:
        self.responses = responses or {}
        self.fail_all = fail_all
        self.commands: list[str] = []

    def execute(self, command: str) -> StepResult:
        self.commands.append(command)
        if not self.fail_all:
            for key, output in self.responses.items():
                if key in command:
                    return StepResult(command=command, output=output.strip())
        return StepResult(
            command=command,
            output="Error from server (NotFound): pods not found",
            exit_code=1,
            error="exit status 1",
        )


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Settings:
    for name in ("NAMESPACE", "CLI", "KUBECONFIG", "CONTEXT", "LOG_TAIL_LINES"):
        monkeypatch.delenv(f"KUBE_TRIAGE_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return Settings(_env_file=None)


@pytest.fixture
def crashloop_executor() -> FakeExecutor:
    # "--previous" must be checked before the plain "logs " key.
    return FakeExecutor({
        "get pod httpd": STATUS_CRASHLOOP,
        "describe pod httpd": DESCRIBE_CRASHLOOP,
        "get events": EVENTS_CRASHLOOP,
        "--previous": NO_PREVIOUS_LOGS,
        "logs httpd": LOGS_CRASHLOOP,
    })
