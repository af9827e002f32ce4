"""Audit pipeline: collect identifiers, fetch the dataset once, resolve, report."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from agentaudit.collectors.agentaudit import AgentAuditCollector
from agentaudit.collectors.manifests import discover_packages
from agentaudit.config import AuditConfig
from agentaudit.scoring.resolver import ResolvedResult, extract_records, resolve
from agentaudit.services.identifiers import collect_identifiers
from agentaudit.services.report import render_summary

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Result of one audit run."""

    results: list[ResolvedResult] = field(default_factory=list)
    has_issues: bool = False
    summary: str = ""
    # True when there was nothing to scan and no request was made
    skipped: bool = False

    def to_dicts(self) -> list[dict]:
        return [r.to_dict() for r in self.results]


async def run_scan(
    config: AuditConfig,
    collector: Optional[AgentAuditCollector] = None,
) -> ScanResult:
    """
    Run one audit.

    Any FetchError from the collector propagates; there is no partial result.

    Args:
        config: Validated run configuration
        collector: Collector to fetch with; one is created (and closed) if omitted

    Returns:
        ScanResult with per-package results, the issue flag and the summary
    """
    discovered: list[str] = []
    if config.scan_config:
        discovered = discover_packages(config.workspace)
        logger.info(f"Auto-detected {len(discovered)} packages from config files")

    identifiers = collect_identifiers(config.packages, discovered)
    if not identifiers:
        logger.warning("No packages to scan. Provide `packages` input or enable `scan-config`.")
        return ScanResult(skipped=True)

    if config.verify:
        logger.info(f"Verification mode: {config.verify}")
    if config.timeout:
        logger.info(f"Timeout: {config.timeout}s")

    logger.info(f"Scanning {len(identifiers)} packages against AgentAudit...")

    owns_collector = collector is None
    if owns_collector:
        collector = AgentAuditCollector()
    try:
        payload = await collector.collect(config.api_url, config.verify, config.timeout)
    finally:
        if owns_collector:
            await collector.close()

    records = extract_records(payload)
    logger.info(f"Retrieved {len(records)} packages from AgentAudit")

    results = resolve(identifiers, records, config.fail_on, config.api_url)
    summary, has_issues = render_summary(results, config.fail_on)

    return ScanResult(results=results, has_issues=has_issues, summary=summary)
