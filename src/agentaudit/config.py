"""Run configuration, validated once at the boundary."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from agentaudit.collectors.agentaudit import DEFAULT_API_URL
from agentaudit.errors import ConfigValidationError
from agentaudit.scoring.factors import FailOn
from agentaudit.services.identifiers import split_package_input

logger = logging.getLogger(__name__)

DEFAULT_FAIL_ON = FailOn.UNSAFE


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Read a GitHub Actions input (INPUT_<NAME>), trimmed; "" when unset."""
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return env.get(key, "").strip()


def parse_fail_on(raw: str) -> FailOn:
    """Validate the threshold, falling back to "unsafe" with a warning."""
    if not raw:
        return DEFAULT_FAIL_ON
    try:
        return FailOn.parse(raw)
    except ConfigValidationError as e:
        logger.warning(f"{e} Falling back to \"{DEFAULT_FAIL_ON.value}\".")
        return DEFAULT_FAIL_ON


@dataclass
class AuditConfig:
    """Everything one audit run needs, already validated."""

    api_url: str = DEFAULT_API_URL
    fail_on: FailOn = DEFAULT_FAIL_ON
    scan_config: bool = False
    verify: str = ""
    timeout: str = ""
    packages: list[str] = field(default_factory=list)
    workspace: Path = field(default_factory=lambda: Path("."))


def load_config(
    api_url: Optional[str] = None,
    fail_on: Optional[str] = None,
    scan_config: Optional[bool] = None,
    verify: Optional[str] = None,
    timeout: Optional[str] = None,
    packages: Optional[str] = None,
    workspace: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AuditConfig:
    """
    Build an AuditConfig from explicit values, falling back to action inputs.

    Any argument left as None is read from the matching INPUT_* variable,
    and the workspace from GITHUB_WORKSPACE.
    """
    env = os.environ if environ is None else environ

    def pick(value: Optional[str], name: str) -> str:
        return value.strip() if value is not None else get_input(name, env)

    if scan_config is None:
        scan_config = get_input("scan-config", env) == "true"

    return AuditConfig(
        api_url=pick(api_url, "api-url") or DEFAULT_API_URL,
        fail_on=parse_fail_on(pick(fail_on, "fail-on")),
        scan_config=scan_config,
        verify=pick(verify, "verify"),
        timeout=pick(timeout, "timeout"),
        packages=split_package_input(pick(packages, "packages")),
        workspace=Path(workspace or env.get("GITHUB_WORKSPACE") or "."),
    )
