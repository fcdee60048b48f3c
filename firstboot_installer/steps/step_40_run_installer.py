from __future__ import annotations

import logging
import subprocess

from ..lib.command import run_installer, split_args
from ..models import Outcome, PackageContext

logger = logging.getLogger(__name__)


class RunInstallerStep:
    step_id = "40_run_installer"
    title = "Installation"
    failure_outcome = Outcome.INSTALL_EXCEPTION

    def run(self, ctx: PackageContext) -> PackageContext:
        if ctx.executable is None:
            raise RuntimeError("executable missing")

        exe = ctx.executable
        args = ctx.package.args
        timeout_s = ctx.config.timeout_s

        logger.info("Running installer %s with arguments: %s", exe, args)
        try:
            result = run_installer(
                [str(exe), *split_args(args)],
                cwd=str(exe.parent),
                timeout_s=timeout_s,
            )
        except subprocess.TimeoutExpired as e:
            raise RuntimeError(f"Installer did not exit within {e.timeout:g} seconds and was killed") from e

        ctx.exit_code = result.returncode
        if result.returncode == 0:
            logger.info("Installation completed successfully (exit code 0)")
            ctx.outcome = Outcome.INSTALL_SUCCEEDED
        else:
            logger.warning("Installation finished with exit code %s", result.returncode)
            ctx.outcome = Outcome.INSTALL_NONZERO_EXIT
        return ctx
