"""Match requested packages to AgentAudit records and derive their ratings."""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from agentaudit.scoring.factors import FailOn, Rating, exceeds_threshold

logger = logging.getLogger(__name__)

# Keys under which the service may wrap the record array, in priority order
WRAPPER_KEYS = ("packages", "skills", "data")

NOT_FOUND_REASON = "Not found in AgentAudit database"
DEFAULT_TRUST_SCORE = 100


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _optional_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class RiskRecord:
    """One package entry from the AgentAudit dataset."""

    slug: Optional[str] = None
    name: Optional[str] = None
    display_name: Optional[str] = None
    package_name: Optional[str] = None
    trust_score: Optional[float] = None
    latest_result: Optional[str] = None
    total_findings: Optional[int] = None
    description: Optional[str] = None
    url: Optional[str] = None
    # score present but not a number; never defaulted to DEFAULT_TRUST_SCORE
    trust_score_malformed: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "RiskRecord":
        """Build a record from a decoded JSON object, ignoring ill-typed fields."""
        findings = data.get("total_findings")
        raw_score = data.get("trust_score")
        trust_score = _optional_number(raw_score)
        return cls(
            slug=_optional_str(data.get("slug")),
            name=_optional_str(data.get("name")),
            display_name=_optional_str(data.get("display_name")),
            package_name=_optional_str(data.get("package_name")),
            trust_score=trust_score,
            latest_result=_optional_str(data.get("latest_result")),
            total_findings=findings if isinstance(findings, int) and not isinstance(findings, bool) else None,
            description=_optional_str(data.get("description")),
            url=_optional_str(data.get("url")),
            trust_score_malformed=raw_score is not None and trust_score is None,
        )

    def matches(self, identifier: str) -> bool:
        """Exact slug, case-insensitive name, or exact package-manager name."""
        if self.slug == identifier:
            return True
        if self.name is not None and self.name.lower() == identifier.lower():
            return True
        return self.package_name == identifier


@dataclass
class ResolvedResult:
    """Outcome for one requested package."""

    slug: str
    found: bool
    rating: Rating
    exceeds: bool = False
    name: Optional[str] = None
    trust_score: Optional[float] = None
    total_findings: int = 0
    description: str = ""
    url: Optional[str] = None
    reason: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.slug

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        if not self.found:
            return {
                "slug": self.slug,
                "found": False,
                "rating": self.rating.value,
                "reason": self.reason,
                "exceeds": self.exceeds,
            }
        return {
            "slug": self.slug,
            "found": True,
            "name": self.name,
            "rating": self.rating.value,
            "trust_score": self.trust_score,
            "total_findings": self.total_findings,
            "description": self.description,
            "exceeds": self.exceeds,
            "url": self.url,
        }


def extract_records(payload: Any) -> list[RiskRecord]:
    """
    Pull the record array out of a service response.

    The service answers either with a bare array or with an object wrapping
    the array under one of WRAPPER_KEYS. The first key present wins, even if
    its value turns out not to be a list.

    Args:
        payload: Decoded JSON body

    Returns:
        List of RiskRecord, skipping entries that are not JSON objects
    """
    if isinstance(payload, list):
        raw = payload
    elif isinstance(payload, dict):
        raw = next((payload[key] for key in WRAPPER_KEYS if key in payload), [])
    else:
        raw = []

    if not isinstance(raw, list):
        logger.warning(f"Unexpected dataset shape: {type(raw).__name__}, treating as empty")
        return []

    records = [RiskRecord.from_dict(item) for item in raw if isinstance(item, dict)]
    skipped = len(raw) - len(records)
    if skipped:
        logger.warning(f"Skipped {skipped} malformed dataset entries")
    return records


def match_record(identifier: str, records: Sequence[RiskRecord]) -> Optional[RiskRecord]:
    """Return the first record in dataset order that matches the identifier."""
    return next((record for record in records if record.matches(identifier)), None)


def derive_rating(record: RiskRecord) -> Rating:
    """Use the explicit rating when usable, otherwise fall back to the trust score.

    Only an absent score defaults to DEFAULT_TRUST_SCORE; an unparseable one is unsafe.
    """
    explicit = Rating.from_token(record.latest_result)
    if explicit is not None:
        return explicit
    if record.trust_score_malformed:
        return Rating.UNSAFE
    trust = DEFAULT_TRUST_SCORE if record.trust_score is None else record.trust_score
    return Rating.from_trust_score(trust)


def resolve(
    identifiers: Sequence[str],
    records: Sequence[RiskRecord],
    fail_on: FailOn,
    api_url: str,
) -> list[ResolvedResult]:
    """
    Resolve every requested identifier against the dataset.

    Args:
        identifiers: Collected package identifiers
        records: Dataset from a single fetch
        fail_on: Active threshold policy
        api_url: Service origin, used to build record links

    Returns:
        One ResolvedResult per identifier, in the same order
    """
    base = api_url.rstrip("/")
    results = []

    for identifier in identifiers:
        record = match_record(identifier, records)

        if record is None:
            results.append(
                ResolvedResult(
                    slug=identifier,
                    found=False,
                    rating=Rating.UNKNOWN,
                    exceeds=exceeds_threshold(Rating.UNKNOWN, fail_on),
                    reason=NOT_FOUND_REASON,
                )
            )
            continue

        rating = derive_rating(record)
        results.append(
            ResolvedResult(
                slug=identifier,
                found=True,
                rating=rating,
                exceeds=exceeds_threshold(rating, fail_on),
                name=record.display_name or record.name or identifier,
                trust_score=record.trust_score,
                total_findings=record.total_findings or 0,
                description=record.description or "",
                url=record.url or f"{base}/packages/{record.slug or identifier}",
            )
        )

    return results
