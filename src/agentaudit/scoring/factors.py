"""Risk ratings and threshold policy."""

from enum import Enum
from typing import Optional

from agentaudit.errors import ConfigValidationError


class Rating(str, Enum):
    """Normalized risk classification of a package."""

    SAFE = "safe"
    CAUTION = "caution"
    UNSAFE = "unsafe"
    UNKNOWN = "unknown"

    @classmethod
    def from_trust_score(cls, score: float) -> "Rating":
        """Get rating from a 0-100 trust score."""
        if score >= 80:
            return cls.SAFE
        elif score >= 50:
            return cls.CAUTION
        else:
            return cls.UNSAFE

    @classmethod
    def from_token(cls, token: Optional[str]) -> Optional["Rating"]:
        """Parse an upstream rating token.

        Returns None for missing tokens, the "none" sentinel and anything
        outside safe/caution/unsafe, so callers can fall back to the trust score.
        """
        if not isinstance(token, str):
            return None
        value = token.lower()
        if value in (cls.SAFE.value, cls.CAUTION.value, cls.UNSAFE.value):
            return cls(value)
        return None

    @property
    def ordinal(self) -> Optional[int]:
        """Position in the safe < caution < unsafe order. Unknown has none."""
        return {
            Rating.SAFE: 0,
            Rating.CAUTION: 1,
            Rating.UNSAFE: 2,
            Rating.UNKNOWN: None,
        }[self]

    @property
    def emoji(self) -> str:
        """Get report symbol for this rating."""
        return {
            Rating.SAFE: "✅",
            Rating.CAUTION: "⚠️",
            Rating.UNSAFE: "🚨",
            Rating.UNKNOWN: "❓",
        }[self]


class FailOn(str, Enum):
    """Threshold policy: which ratings fail the run."""

    UNSAFE = "unsafe"
    CAUTION = "caution"
    ANY = "any"

    @classmethod
    def parse(cls, raw: str) -> "FailOn":
        """Parse a configured threshold, raising ConfigValidationError if invalid."""
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(level.value for level in cls)
            raise ConfigValidationError(
                f"Invalid 'fail-on' value: \"{raw}\". Must be one of: {allowed}."
            ) from None


def exceeds_threshold(rating: Rating, fail_on: FailOn) -> bool:
    """Check whether a rating exceeds the configured tolerance."""
    if fail_on == FailOn.ANY:
        return rating != Rating.SAFE
    if fail_on == FailOn.CAUTION:
        # unknown has no ordinal and never trips the caution threshold
        return rating.ordinal is not None and rating.ordinal >= Rating.CAUTION.ordinal
    return rating == Rating.UNSAFE
