"""Intent layer: classify a free-text query and extract its target."""

from kube_triage.intent.classifier import classify, is_diagnostic_query, determine_workflow
from kube_triage.intent.extractor import extract

__all__ = [
    "classify",
    "determine_workflow",
    "extract",
    "is_diagnostic_query",
]
