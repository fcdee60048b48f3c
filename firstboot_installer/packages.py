from __future__ import annotations

import json
from typing import Any, List, Optional

from .models import DEFAULT_INSTALL_ARGS, SoftwarePackage


class PackageSpecError(ValueError):
    pass


def package_from_mapping(item: Any, *, index: int = 0) -> SoftwarePackage:
    if not isinstance(item, dict):
        raise PackageSpecError(f"Package #{index} must be an object with 'name' and 'args', got {type(item).__name__}")

    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise PackageSpecError(f"Package #{index} is missing a non-empty 'name'")

    args = item.get("args")
    if args is not None and not isinstance(args, str):
        raise PackageSpecError(f"Package #{index} ({name}): 'args' must be a string")
    # Blank counts as not supplied.
    if args is None or not args.strip():
        args = DEFAULT_INSTALL_ARGS

    return SoftwarePackage(name=name.strip(), args=args)


def packages_from_list(items: Any) -> List[SoftwarePackage]:
    if not isinstance(items, list):
        raise PackageSpecError(f"Package list must be a list, got {type(items).__name__}")
    return [package_from_mapping(item, index=i) for i, item in enumerate(items)]


def parse_packages(text: Optional[str]) -> List[SoftwarePackage]:
    """Parse a JSON-encoded list of {"name": ..., "args": ...} objects.

    Empty input yields an empty list (single-package mode).
    """

    if text is None or not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PackageSpecError(f"Package list is not valid JSON: {e}") from e
    # A single object is accepted as a one-entry list.
    if isinstance(data, dict):
        data = [data]
    return packages_from_list(data)


def dump_packages(packages: List[SoftwarePackage]) -> str:
    return json.dumps([{"name": p.name, "args": p.args} for p in packages], separators=(",", ":"))
