from .step_10_locate_archive import LocateArchiveStep
from .step_20_extract_archive import ExtractArchiveStep
from .step_30_discover_executable import DiscoverExecutableStep
from .step_40_run_installer import RunInstallerStep

__all__ = [
    "LocateArchiveStep",
    "ExtractArchiveStep",
    "DiscoverExecutableStep",
    "RunInstallerStep",
]
