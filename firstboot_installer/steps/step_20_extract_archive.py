from __future__ import annotations

import logging
from pathlib import Path

from ..lib.archive import archive_stem, extract_archive
from ..models import Outcome, PackageContext

logger = logging.getLogger(__name__)


class ExtractArchiveStep:
    step_id = "20_extract_archive"
    title = "Extraction"
    failure_outcome = Outcome.EXTRACTION_FAILED

    def run(self, ctx: PackageContext) -> PackageContext:
        if ctx.archive_path is None:
            raise RuntimeError("archive path missing")

        cfg = ctx.config
        dst = Path(cfg.work_dir) / cfg.extract_dir_name / archive_stem(ctx.package.name)
        ctx.extract_dir = dst

        logger.info("Extracting %s to %s", ctx.archive_path, dst)
        extract_archive(ctx.archive_path, dst)
        logger.info("Extraction completed")
        return ctx
