"""Structured records flowing through the diagnostic pipeline."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_NAMESPACE = "default"


class WorkflowType(str, Enum):
    """Diagnostic scenario that determines which inspection steps are planned."""

    TCPDUMP = "tcpdump"
    PING = "ping"
    DNS = "dns"
    HTTP = "http"
    NETSTAT = "netstat"
    POD_DIAGNOSTICS = "pod_diagnostics"
    GENERAL = "general"


class StepOutput(str, Enum):
    """What a step's output is expected to contain, used to pick a parser."""

    POD_STATUS = "pod_status"
    DESCRIBE = "describe"
    EVENTS = "events"
    LOGS = "logs"
    PREVIOUS_LOGS = "previous_logs"
    RAW = "raw"


class IssueKind(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueSource(str, Enum):
    STATUS = "status"
    DESCRIBE = "describe"
    EVENTS = "events"
    LOGS = "logs"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Category(str, Enum):
    IMAGE = "image"
    STABILITY = "stability"
    COMPUTE = "compute"
    NETWORK = "network"
    STORAGE = "storage"
    SCHEDULING = "scheduling"
    CONFIG = "config"
    EVENTS = "events"
    APPLICATION = "application"
    LIFECYCLE = "lifecycle"


class Classification(BaseModel):
    """Outcome of intent classification for one query."""

    model_config = ConfigDict(frozen=True)

    is_diagnostic: bool
    workflow: WorkflowType = WorkflowType.GENERAL


class Target(BaseModel):
    """Resource identifiers extracted from a free-text query."""

    model_config = ConfigDict(frozen=True)

    resource_name: str | None = Field(default=None, description="Pod name, if one was mentioned")
    namespace: str | None = Field(default=None, description="Namespace, if one was mentioned")
    interface: str | None = Field(default=None, description="Network interface for packet capture")
    filter: str | None = Field(default=None, description="Capture filter expression, e.g. 'port 80'")
    duration: str | None = Field(default=None, description="Capture duration, e.g. '30s'")
    found: bool = Field(default=False, description="Whether a specific pod was identified")

    def namespace_or_default(self, default: str = DEFAULT_NAMESPACE) -> str:
        return self.namespace or default


class WorkflowStep(BaseModel):
    """One planned inspection command."""

    model_config = ConfigDict(frozen=True)

    ordinal: int = Field(..., ge=1, description="1-based position in the workflow")
    description: str
    command: str
    purpose: str
    output: StepOutput = Field(
        default=StepOutput.RAW,
        description="Kind of output the command produces",
    )


class StepResult(BaseModel):
    """Outcome of executing one step's command."""

    command: str
    output: str = ""
    exit_code: int = 0
    duration_ms: int = 0
    error: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class Issue(BaseModel):
    """One structured finding derived from a single step's output."""

    model_config = ConfigDict(frozen=True)

    kind: IssueKind
    source: IssueSource
    message: str
    severity: Severity
    category: Category
    actionable: bool = True
    suggestion: str = ""


class DiagnosticResult(BaseModel):
    """Synthesized root cause for a pod diagnostics run."""

    pod_status: str = Field(default="", description="STATUS column from the pod listing")
    issues: list[Issue] = Field(default_factory=list)
    root_cause: str = ""
    recommendation: str = ""
    next_steps: list[str] = Field(default_factory=list)
    logs_needed: bool = False


class Run(BaseModel):
    """Everything produced while answering one query."""

    query: str
    workflow_type: WorkflowType
    target: Target
    steps: list[WorkflowStep] = Field(default_factory=list)
    results: list[StepResult] = Field(default_factory=list)
    diagnostic: DiagnosticResult | None = None
    summary: str = ""
    success: bool = False
