"""kube-triage: rule-based troubleshooting for Kubernetes and OpenShift pods."""

__version__ = "0.1.0"
