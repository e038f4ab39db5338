"""Configuration and environment for kube-triage."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="KUBE_TRIAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; uses KUBECONFIG env or default location if unset",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")
    namespace: str = Field(
        default="default",
        description="Namespace used when the query does not name one",
    )
    cli: Literal["kubectl", "oc"] = Field(
        default="kubectl",
        description="Cluster CLI the planned commands are written for",
    )

    # Execution
    command_timeout: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Seconds before a single step's command is killed",
    )

    # Planning
    log_tail_lines: int = Field(default=50, ge=1, le=5000, description="Lines of pod logs to fetch")
    capture_interface: str = Field(
        default="any",
        description="Interface for packet capture when the query names none",
    )
    capture_duration: str = Field(
        default="15s",
        pattern=r"^\d+[sm]$",
        description="Packet capture duration when the query names none",
    )

    # Reporting
    output_preview_chars: int = Field(
        default=200,
        ge=20,
        description="Characters of raw step output shown in step-by-step summaries",
    )


def get_settings() -> Settings:
    """Return validated settings instance."""
    return Settings()
