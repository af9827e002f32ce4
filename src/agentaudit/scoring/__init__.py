"""Risk ratings, threshold policy and dataset matching."""

from agentaudit.scoring.factors import FailOn, Rating, exceeds_threshold
from agentaudit.scoring.resolver import ResolvedResult, RiskRecord, extract_records, resolve

__all__ = [
    "FailOn",
    "Rating",
    "exceeds_threshold",
    "ResolvedResult",
    "RiskRecord",
    "extract_records",
    "resolve",
]
