from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    work_dir: str
    log_default: str
    extract_dir_name: str = "extracted"
    fallback_log_name: str = "firstboot-installer.log"


WINDOWS_PATHS = Paths(
    work_dir="C:\\SoftwareInstall",
    log_default="C:\\SoftwareInstall\\install.log",
)

POSIX_PATHS = Paths(
    work_dir="/var/lib/firstboot-installer",
    log_default="/var/log/firstboot-installer.log",
)

PATHS = WINDOWS_PATHS if os.name == "nt" else POSIX_PATHS
