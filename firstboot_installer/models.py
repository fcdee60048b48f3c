from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .config import InstallerConfig

DEFAULT_ARCHIVE_NAME = "software.zip"
DEFAULT_INSTALL_ARGS = "/S"


@dataclass(frozen=True)
class SoftwarePackage:
    """A staged archive and the arguments its installer is run with."""

    name: str = DEFAULT_ARCHIVE_NAME
    args: str = DEFAULT_INSTALL_ARGS


class Outcome(Enum):
    ARCHIVE_MISSING = "archive-missing"
    EXTRACTION_FAILED = "extraction-failed"
    NO_EXECUTABLE_FOUND = "no-executable-found"
    INSTALL_SUCCEEDED = "install-succeeded"
    INSTALL_NONZERO_EXIT = "install-nonzero-exit"
    INSTALL_EXCEPTION = "install-exception"

    @property
    def is_staging_failure(self) -> bool:
        return self in STAGING_FAILURES

    @property
    def is_install_failure(self) -> bool:
        return self in (Outcome.INSTALL_NONZERO_EXIT, Outcome.INSTALL_EXCEPTION)


STAGING_FAILURES = frozenset(
    {Outcome.ARCHIVE_MISSING, Outcome.EXTRACTION_FAILED, Outcome.NO_EXECUTABLE_FOUND}
)


@dataclass
class PackageContext:
    """Working record for one package as it moves through the steps."""

    package: SoftwarePackage
    config: "InstallerConfig"
    archive_path: Optional[Path] = None
    extract_dir: Optional[Path] = None
    executable: Optional[Path] = None
    exit_code: Optional[int] = None
    outcome: Optional[Outcome] = None
    error: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.outcome is not None
