from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .config import InstallerConfig, load_installer_config
from .logging_utils import configure_logging
from .models import Outcome, PackageContext, SoftwarePackage
from .packages import PackageSpecError
from .pipeline import run_pipeline
from .steps import (
    DiscoverExecutableStep,
    ExtractArchiveStep,
    LocateArchiveStep,
    RunInstallerStep,
)

logger = logging.getLogger(__name__)


EXIT_OK = 0
EXIT_STAGING_FAILURE = 2
EXIT_INSTALL_FAILURE = 3

COMPLETION_MESSAGE = "Installation script completed"


def build_steps():
    return [
        LocateArchiveStep(),
        ExtractArchiveStep(),
        DiscoverExecutableStep(),
        RunInstallerStep(),
    ]


def prepare_workspace(work_dir: str) -> bool:
    try:
        Path(work_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("ERROR: Could not create workspace %s: %s", work_dir, e)
        return False
    logger.info("Workspace ready: %s", work_dir)
    return True


def install_package(package: SoftwarePackage, config: InstallerConfig) -> Outcome:
    """Run locate -> extract -> discover -> install for one package."""

    logger.info("Processing package %s", package.name)
    ctx = PackageContext(package=package, config=config)
    result = run_pipeline(ctx=ctx, steps=build_steps())
    outcome = result.ctx.outcome
    if outcome is None:  # pragma: no cover
        outcome = Outcome.INSTALL_EXCEPTION
    return outcome


def exit_status(outcomes: Iterable[Outcome], *, strict: bool) -> int:
    if not strict:
        return EXIT_OK
    outcomes = list(outcomes)
    if any(o.is_staging_failure for o in outcomes):
        return EXIT_STAGING_FAILURE
    if any(o.is_install_failure for o in outcomes):
        return EXIT_INSTALL_FAILURE
    return EXIT_OK


def run(config: Optional[InstallerConfig] = None, *, config_error: Optional[str] = None) -> int:
    """Run the first-boot install flow for every configured package.

    Never raises for install problems: each one is logged and the run always
    ends with the completion line. config_error reports a config file that
    could not be loaded; the run then continues on defaults plus flags.
    Returns the process exit status (always 0 unless strict_exit is set).
    """

    config = config or InstallerConfig()
    actual_log_path = configure_logging(log_path=config.log_path)

    logger.info("Starting software installation script")
    logger.info("Log file: %s", actual_log_path or "(console only)")
    logger.info("Working directory: %s", Path.cwd())

    setup_failed = False
    if config_error:
        logger.error("ERROR: Could not load config: %s", config_error)
        setup_failed = True

    prepare_workspace(config.work_dir)

    outcomes: List[Outcome] = []
    summary: List[str] = []
    try:
        packages = config.packages
    except PackageSpecError as e:
        logger.error("ERROR: Invalid package list: %s", e)
        packages = []
        setup_failed = True

    for package in packages:
        outcome = install_package(package, config)
        outcomes.append(outcome)
        summary.append(f"{package.name}: {outcome.value}")

    if len(summary) > 1:
        logger.info("Summary:")
        for line in summary:
            logger.info("  %s", line)

    status = exit_status(outcomes, strict=config.strict_exit)
    if setup_failed and config.strict_exit:
        status = EXIT_STAGING_FAILURE
    if status != EXIT_OK:
        logger.info("Strict exit enabled, exiting with status %d", status)
    logger.info(COMPLETION_MESSAGE)
    return status


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="firstboot-installer")
    p.add_argument("--config", default=None, help="Path to installer config (yaml|json)")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("--work-dir", default=None, help="Workspace directory (archive fallback + extraction root)")
    p.add_argument("--archive", default=None, help="Archive file name (single-package mode)")
    p.add_argument("--install-args", default=None, help="Installer arguments (default: /S)")
    p.add_argument(
        "--packages",
        default=None,
        help='JSON list of packages, e.g. \'[{"name": "app.zip", "args": "/S"}]\'',
    )
    p.add_argument("--timeout", type=float, default=None, help="Installer timeout in seconds (0 = no limit)")
    p.add_argument("--strict-exit", action="store_true", help="Exit non-zero when a package fails")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    config = InstallerConfig()
    config_error = None
    if args.config:
        try:
            config = load_installer_config(args.config)
        except (OSError, ValueError) as e:
            config_error = f"{args.config}: {e}"

    config = config.with_overrides(
        log_path=args.log,
        work_dir=args.work_dir,
        archive_name=args.archive,
        install_args=args.install_args,
        packages=args.packages,
        timeout_s=args.timeout,
        strict_exit=True if args.strict_exit else None,
    )
    return run(config, config_error=config_error)


if __name__ == "__main__":
    raise SystemExit(main())
