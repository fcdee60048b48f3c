from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional


def _sort_key(root: Path, p: Path) -> tuple[str, str]:
    rel = p.relative_to(root).as_posix()
    return (rel.lower(), rel)


def find_executables(root: str | Path, extensions: Iterable[str] = (".exe",)) -> List[Path]:
    """All files under root whose suffix is in extensions, in discovery order.

    Discovery order is the relative POSIX path compared case-insensitively,
    ties broken case-sensitively, so the result does not depend on the
    filesystem's directory walk order.
    """

    r = Path(root)
    if not r.is_dir():
        return []
    exts = {e.lower() for e in extensions}
    found = [p for p in r.rglob("*") if p.is_file() and p.suffix.lower() in exts]
    return sorted(found, key=lambda p: _sort_key(r, p))


def find_executable(root: str | Path, extensions: Iterable[str] = (".exe",)) -> Optional[Path]:
    found = find_executables(root, extensions)
    return found[0] if found else None


def list_dir(path: str | Path, *, include_hidden: bool = True) -> list[str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    if not p.is_dir():
        raise NotADirectoryError(str(path))
    out: list[str] = []
    for child in sorted(p.iterdir(), key=lambda c: c.name.lower()):
        if not include_hidden and child.name.startswith("."):
            continue
        suffix = "/" if child.is_dir() else ""
        out.append(child.name + suffix)
    return out
