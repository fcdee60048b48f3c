from __future__ import annotations

import logging

from ..lib.discovery import find_executables
from ..models import Outcome, PackageContext

logger = logging.getLogger(__name__)


class DiscoverExecutableStep:
    step_id = "30_discover_executable"
    title = "Executable discovery"
    failure_outcome = Outcome.NO_EXECUTABLE_FOUND

    def run(self, ctx: PackageContext) -> PackageContext:
        if ctx.extract_dir is None:
            raise RuntimeError("extraction directory missing")

        exts = ctx.config.executable_extensions
        candidates = find_executables(ctx.extract_dir, exts)
        if not candidates:
            logger.error(
                "ERROR: No executable (%s) found in %s (%s)",
                ", ".join(exts),
                ctx.extract_dir,
                Outcome.NO_EXECUTABLE_FOUND.value,
            )
            ctx.outcome = Outcome.NO_EXECUTABLE_FOUND
            return ctx

        if len(candidates) > 1:
            logger.info("Found %d executables, using the first in path order", len(candidates))
        ctx.executable = candidates[0]
        logger.info("Found executable: %s", ctx.executable)
        return ctx
