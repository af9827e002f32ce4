"""Shared fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch):
    """Keep the runner's own GitHub Actions variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("INPUT_") or key in (
            "GITHUB_ACTIONS",
            "GITHUB_OUTPUT",
            "GITHUB_STEP_SUMMARY",
            "GITHUB_WORKSPACE",
        ):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def dataset():
    """A small AgentAudit dataset covering the matching and rating paths."""
    return [
        {"slug": "left-pad", "name": "left-pad", "trust_score": 95, "url": "https://www.agentaudit.dev/packages/left-pad"},
        {"slug": "evil-pkg", "latest_result": "unsafe", "trust_score": 90},
        {"slug": "meh-lib", "display_name": "Meh Library", "trust_score": 60, "total_findings": 3},
        {"slug": "mcp-server-fs", "name": "Filesystem", "package_name": "@mcp/server-fs", "latest_result": "none"},
    ]
