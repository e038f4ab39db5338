"""CLI entrypoint for kube-triage."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from kube_triage import __version__
from kube_triage.config import get_settings
from kube_triage.agent import TroubleshootingEngine, print_run


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="kube-triage: diagnose Kubernetes pod and network problems from a plain-language query.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "query",
        help="What to troubleshoot, e.g. \"why is my-app failing in prod namespace\"",
    )
    parser.add_argument(
        "--namespace",
        "-n",
        default=None,
        help="Namespace used when the query names none (default: from env or 'default')",
    )
    parser.add_argument(
        "--cli",
        choices=["kubectl", "oc"],
        default=None,
        help="Cluster CLI to generate commands for (default: from env or 'kubectl')",
    )
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to kubeconfig (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubernetes context to use",
    )
    parser.add_argument(
        "--classify-only",
        action="store_true",
        help="Only print the detected intent and target",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the planned commands; do not execute anything",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full run as JSON instead of a report",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for kube-triage CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    logger = logging.getLogger("kube_triage")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    console = Console()
    try:
        settings = get_settings()
        if args.namespace:
            settings.namespace = args.namespace
        if args.cli:
            settings.cli = args.cli
        if args.kubeconfig:
            settings.kubeconfig = args.kubeconfig
        if args.context:
            settings.context = args.context

        engine = TroubleshootingEngine(settings=settings)

        if args.classify_only:
            classification = engine.classify(args.query)
            target = engine.extract(args.query)
            if args.json:
                console.print_json(data={
                    "classification": classification.model_dump(mode="json"),
                    "target": target.model_dump(mode="json"),
                })
            else:
                console.print(f"[bold]Diagnostic:[/bold] {classification.is_diagnostic}")
                console.print(f"[bold]Workflow:[/bold] {classification.workflow.value}")
                console.print(f"[bold]Target:[/bold] {target.model_dump(exclude_none=True)}")
            return 0

        if args.dry_run:
            if args.json:
                workflow, target, steps = engine.plan(args.query)
                console.print_json(data={
                    "workflow_type": workflow.value,
                    "target": target.model_dump(mode="json"),
                    "steps": [s.model_dump(mode="json") for s in steps],
                })
            else:
                console.print(engine.plan_summary(args.query))
            return 0

        result = engine.run(args.query)
        if args.json:
            console.print_json(result.model_dump_json())
        else:
            print_run(result, console)
        return 0 if result.success else 1
    except Exception as e:
        logging.exception("Troubleshooting failed")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
