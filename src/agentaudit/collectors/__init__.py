"""Data collectors for the AgentAudit service and local manifests."""

from agentaudit.collectors.agentaudit import AgentAuditCollector
from agentaudit.collectors.manifests import discover_packages

__all__ = ["AgentAuditCollector", "discover_packages"]
