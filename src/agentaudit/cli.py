"""Command-line interface for agentaudit."""

import asyncio
import json
import logging
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape

from agentaudit import __version__
from agentaudit import actions
from agentaudit.config import load_config
from agentaudit.errors import AuditError
from agentaudit.services.scanner import ScanResult, run_scan

app = typer.Typer(
    name="agentaudit",
    help="Check packages against AgentAudit risk ratings and fail the build on risky ones",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("agentaudit")


def version_callback(value: bool):
    if value:
        console.print(f"agentaudit version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route library logs to stderr, plus annotations when running in Actions."""
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.addHandler(
        RichHandler(console=err_console, show_time=False, show_path=False, markup=False)
    )
    if actions.is_github_actions():
        logger.addHandler(actions.WorkflowCommandHandler())


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """AgentAudit gate - package risk checks for CI."""
    load_dotenv(find_dotenv(usecwd=True))


def _fail(message: str) -> None:
    """Report a failed run and exit non-zero."""
    if actions.is_github_actions():
        actions.issue_command("error", message)
    err_console.print(f"[red]{escape(message)}[/red]", highlight=False, soft_wrap=True)
    raise typer.Exit(1)


def _publish(outcome: ScanResult, output_json: bool) -> None:
    """Write outputs and the job summary."""
    results_json = json.dumps(outcome.to_dicts())

    if outcome.summary and not actions.append_step_summary(outcome.summary):
        # keep stdout clean for --json
        (err_console if output_json else console).print(Markdown(outcome.summary))

    actions.set_output("results", results_json)
    actions.set_output("has-issues", str(outcome.has_issues).lower())

    if output_json:
        console.print(
            json.dumps(outcome.to_dicts(), indent=2, ensure_ascii=False),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


@app.command()
def scan(
    packages: Optional[str] = typer.Option(None, "--packages", "-p", help="Comma-separated package names"),
    fail_on: Optional[str] = typer.Option(None, "--fail-on", "-f", help="Threshold: unsafe, caution or any"),
    scan_config: Optional[bool] = typer.Option(
        None, "--scan-config/--no-scan-config", help="Detect packages from package.json / requirements.txt"
    ),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="AgentAudit service URL"),
    verify: Optional[str] = typer.Option(None, "--verify", help="Verification mode forwarded to the service"),
    timeout: Optional[str] = typer.Option(None, "--timeout", help="Timeout forwarded to the service"),
    workspace: Optional[str] = typer.Option(None, "--workspace", "-w", help="Directory to scan for manifests"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Print results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """Audit packages and fail when any exceeds the risk threshold.

    Options left unset are read from the GitHub Actions inputs (INPUT_*).
    """
    _configure_logging(verbose)
    config = load_config(
        api_url=api_url,
        fail_on=fail_on,
        scan_config=scan_config,
        verify=verify,
        timeout=timeout,
        packages=packages,
        workspace=workspace,
    )

    try:
        outcome = asyncio.run(run_scan(config))
        _publish(outcome, output_json)
    except (AuditError, OSError) as e:
        _fail(f"AgentAudit scan failed: {e}")

    if outcome.has_issues:
        _fail(f'AgentAudit: packages exceed "{config.fail_on.value}" risk threshold')

    if not outcome.skipped:
        console.print("✅ All packages passed AgentAudit security scan")


if __name__ == "__main__":
    app()
