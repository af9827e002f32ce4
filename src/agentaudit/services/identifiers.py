"""Collect the package identifiers to audit."""

from typing import Iterable


def split_package_input(raw: str) -> list[str]:
    """Split a comma-delimited package list, dropping blank entries."""
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


def collect_identifiers(explicit: Iterable[str], discovered: Iterable[str]) -> list[str]:
    """
    Merge explicit and discovered identifiers.

    Deduplication is exact-string; case only matters later, when matching
    against the dataset. Explicit identifiers come first, then discovered
    ones, each in their original order.
    """
    seen = set()
    identifiers = []
    for identifier in [*explicit, *discovered]:
        if identifier not in seen:
            seen.add(identifier)
            identifiers.append(identifier)
    return identifiers
