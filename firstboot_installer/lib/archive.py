from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


def locate_archive(name: str, search_dirs: Iterable[str | Path]) -> Optional[Path]:
    """Return the first search_dirs/<name> that is a file, else None."""

    for d in search_dirs:
        candidate = Path(d) / name
        logger.debug("Looking for %s", candidate)
        if candidate.is_file():
            return candidate
    return None


def extract_archive(archive: str | Path, dst: str | Path) -> Path:
    """Expand the full archive into dst, replacing whatever a previous run left.

    dst is emptied first so stale installers cannot be discovered. The format is picked
    from the archive's file name (zip, tar, tar.gz, tar.bz2, tar.xz).
    """

    a = Path(archive)
    d = Path(dst)
    if not a.is_file():
        raise FileNotFoundError(str(a))

    if d.exists():
        logger.info("Clearing previous extraction %s", d)
        shutil.rmtree(d)
    d.mkdir(parents=True, exist_ok=True)
    shutil.unpack_archive(str(a), str(d))
    return d


def archive_stem(name: str) -> str:
    """software.zip -> software, tools.tar.gz -> tools."""

    base = Path(name).name
    lower = base.lower()
    for _, exts, _ in shutil.get_unpack_formats():
        for ext in sorted(exts, key=len, reverse=True):
            if lower.endswith(ext) and len(base) > len(ext):
                return base[: -len(ext)]
    return Path(base).stem or base
