from __future__ import annotations

import logging
from pathlib import Path

from ..lib.archive import locate_archive
from ..lib.discovery import list_dir
from ..models import Outcome, PackageContext

logger = logging.getLogger(__name__)


class LocateArchiveStep:
    step_id = "10_locate_archive"
    title = "Archive lookup"
    failure_outcome = Outcome.ARCHIVE_MISSING

    def run(self, ctx: PackageContext) -> PackageContext:
        name = ctx.package.name
        cwd = Path.cwd()
        # Provisioning may stage the file in either place; cwd wins.
        search_dirs = [cwd, Path(ctx.config.work_dir)]

        logger.info("Looking for archive %s", name)
        found = locate_archive(name, search_dirs)
        if found is not None:
            logger.info("Found archive at %s", found)
            ctx.archive_path = found
            return ctx

        logger.error(
            "ERROR: Archive %s not found in %s (%s)",
            name,
            " or ".join(str(d) for d in search_dirs),
            Outcome.ARCHIVE_MISSING.value,
        )
        self._log_cwd_contents(cwd)
        ctx.outcome = Outcome.ARCHIVE_MISSING
        return ctx

    def _log_cwd_contents(self, cwd: Path) -> None:
        try:
            entries = list_dir(cwd)
        except OSError as e:
            logger.warning("Could not list %s: %s", cwd, e)
            return
        logger.info("Current directory contents (%s):", cwd)
        if not entries:
            logger.info("  (empty)")
        for entry in entries:
            logger.info("  %s", entry)
