"""Output formatters for reconciliation reports."""

import json

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from cwpolicy.models import DeletionPolicy, ReconcileReport

POLICY_COLORS = {
    DeletionPolicy.RETAIN: "green",
    DeletionPolicy.DELETE: "yellow",
}


def _deploy_kind(report: ReconcileReport) -> str:
    return "first deploy" if report.first_deploy else "update"


def format_json(report: ReconcileReport) -> str:
    """Format a report as JSON."""
    return json.dumps(
        {
            "stack_name": report.stack_name,
            "first_deploy": report.first_deploy,
            "deletion_policy": report.policy.value,
            "removed": report.removed,
            "managed": report.managed,
        },
        indent=2,
    )


def format_markdown(report: ReconcileReport) -> str:
    """Format a report as Markdown."""
    lines = [
        f"## CloudWatch Policy — {report.stack_name} ({_deploy_kind(report)})",
        "",
    ]

    if not report.managed and not report.removed:
        lines.append("No log groups in template.")
        return "\n".join(lines)

    lines.append("| Log Group | Action |")
    lines.append("|-----------|--------|")
    for key in report.managed:
        lines.append(f"| {key} | DeletionPolicy `{report.policy.value}` |")
    for key in report.removed:
        lines.append(f"| {key} | removed (already exists) |")

    return "\n".join(lines)


def format_table(report: ReconcileReport) -> str:
    """Format a report as a Rich tree view, returned as a string."""
    console = Console(record=True, width=120)
    tree = Tree(
        Text.from_markup(f"[bold]{report.stack_name}[/bold] — {_deploy_kind(report)}")
    )

    if not report.managed and not report.removed:
        tree.add(Text("No log groups in template."))

    color = POLICY_COLORS[report.policy]
    for key in report.managed:
        tree.add(Text.from_markup(f"{key} — [{color}]{report.policy.value}[/{color}]"))
    for key in report.removed:
        tree.add(Text.from_markup(f"[dim]{key} — removed (already exists)[/dim]"))

    console.print(tree)
    return console.export_text()
