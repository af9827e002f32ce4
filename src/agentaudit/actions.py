"""GitHub Actions plumbing: outputs, job summary and workflow commands."""

import logging
import os
import sys
import uuid
from typing import Mapping, Optional, TextIO

logger = logging.getLogger(__name__)


def is_github_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check if we are running inside a GitHub Actions job."""
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS") == "true"


def escape_data(message: str) -> str:
    """Escape a workflow command payload."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str, stream: Optional[TextIO] = None) -> None:
    """Write a ::command::message line to stdout."""
    out = stream or sys.stdout
    out.write(f"::{command}::{escape_data(message)}\n")
    out.flush()


def set_output(name: str, value: str, environ: Optional[Mapping[str, str]] = None) -> None:
    """
    Set a step output.

    Appends a heredoc block to the file named by GITHUB_OUTPUT. Outside a
    runner there is nowhere to put outputs, so they are only logged.
    """
    env = os.environ if environ is None else environ
    output_file = env.get("GITHUB_OUTPUT")
    if not output_file:
        logger.debug(f"output {name}={value}")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def append_step_summary(text: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Append markdown to the job summary. Returns False when no summary file is configured."""
    env = os.environ if environ is None else environ
    summary_file = env.get("GITHUB_STEP_SUMMARY")
    if not summary_file:
        return False
    with open(summary_file, "a", encoding="utf-8") as f:
        f.write(text)
    return True


class WorkflowCommandHandler(logging.Handler):
    """Mirror warnings and errors as ::warning:: / ::error:: annotations."""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__(level=logging.WARNING)
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            command = "error" if record.levelno >= logging.ERROR else "warning"
            issue_command(command, record.getMessage(), self.stream)
        except Exception:
            self.handleError(record)
