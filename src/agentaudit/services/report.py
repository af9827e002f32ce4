"""Markdown summary for the job summary page."""

from typing import Sequence

from agentaudit.scoring.factors import FailOn
from agentaudit.scoring.resolver import ResolvedResult

REPORT_TITLE = "## 🛡️ AgentAudit Security Scan Results"
ISSUES_WARNING = "> ⚠️ **Some packages exceed the configured risk threshold!**"


def _status(result: ResolvedResult) -> str:
    if not result.found:
        return "❓ Not in database"
    if result.exceeds:
        return "❌ Exceeds threshold"
    return "✅ OK"


def _package_cell(result: ResolvedResult) -> str:
    if result.found:
        return f"[{result.display_name}]({result.url})"
    return result.slug


def has_issues(results: Sequence[ResolvedResult]) -> bool:
    """True if any result exceeds the threshold."""
    return any(r.exceeds for r in results)


def render_summary(results: Sequence[ResolvedResult], fail_on: FailOn) -> tuple[str, bool]:
    """
    Render the scan results as a markdown table.

    Args:
        results: Resolved results in request order
        fail_on: Active threshold, named in the footer

    Returns:
        Tuple of (markdown text, whether any package exceeds the threshold)
    """
    issues = has_issues(results)

    lines = [
        REPORT_TITLE,
        "",
        "| Package | Rating | Status |",
        "|---------|--------|--------|",
    ]
    for r in results:
        lines.append(f"| {_package_cell(r)} | {r.rating.emoji} {r.rating.value} | {_status(r)} |")

    lines.append("")
    lines.append(f"**Threshold:** fail on `{fail_on.value}` | **Scanned:** {len(results)} packages")

    if issues:
        lines.append("")
        lines.append(ISSUES_WARNING)

    return "\n".join(lines) + "\n", issues
