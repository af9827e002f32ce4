"""Agentaudit services for collecting identifiers and reporting."""

from agentaudit.services.identifiers import collect_identifiers, split_package_input
from agentaudit.services.report import render_summary

__all__ = ["collect_identifiers", "split_package_input", "render_summary"]
