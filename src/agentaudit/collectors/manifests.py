"""Discover package names from dependency manifests in a workspace."""

import json
import logging
import re
from pathlib import Path
from typing import Callable, Union

from agentaudit.errors import ManifestParseError

logger = logging.getLogger(__name__)

# Version pins and extras start at the first of these characters
_SPECIFIER_RE = re.compile(r"[=<>!~\[]")


def _parse_package_json(path: Path) -> list[str]:
    """Parse package.json for npm dependency names."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ManifestParseError(path.name, str(e)) from e

    if not isinstance(data, dict):
        raise ManifestParseError(path.name, "expected a JSON object")

    names = []
    for section in ("dependencies", "devDependencies"):
        deps = data.get(section)
        if isinstance(deps, dict):
            names.extend(deps)
    return names


def _parse_requirements_txt(path: Path) -> list[str]:
    """Parse requirements.txt; strips version specifiers: requests>=2.28 -> requests."""
    try:
        lines = path.read_text(encoding="utf-8").split("\n")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestParseError(path.name, str(e)) from e

    names = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        name = _SPECIFIER_RE.split(line, maxsplit=1)[0].strip()
        if name:
            names.append(name)
    return names


# Checked in this order; later files append after earlier ones
MANIFEST_PARSERS: dict[str, Callable[[Path], list[str]]] = {
    "package.json": _parse_package_json,
    "requirements.txt": _parse_requirements_txt,
}


def discover_packages(workspace: Union[str, Path]) -> list[str]:
    """
    Collect package names from the manifests found in a workspace root.

    Missing manifests contribute nothing. A manifest that cannot be parsed is
    logged as a warning and skipped; it never aborts discovery.

    Args:
        workspace: Directory holding the manifests

    Returns:
        Deduplicated package names in discovery order
    """
    root = Path(workspace)
    seen = set()
    packages = []

    for filename, parser_fn in MANIFEST_PARSERS.items():
        path = root / filename
        if not path.is_file():
            continue
        try:
            names = parser_fn(path)
        except ManifestParseError as e:
            logger.warning(str(e))
            continue
        for name in names:
            if name not in seen:
                seen.add(name)
                packages.append(name)

    return packages
