"""AgentAudit gate - check packages against AgentAudit risk ratings in CI."""

__version__ = "0.3.0"
