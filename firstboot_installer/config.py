from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .lib.env import PATHS
from .models import DEFAULT_ARCHIVE_NAME, DEFAULT_INSTALL_ARGS, SoftwarePackage
from .packages import packages_from_list, parse_packages

DEFAULT_TIMEOUT_S = 3600.0
DEFAULT_EXECUTABLE_EXTENSIONS = (".exe",)


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def log_path(self) -> str:
        return str(self.raw.get("log_path") or PATHS.log_default)

    @property
    def work_dir(self) -> str:
        return str(self.raw.get("work_dir") or PATHS.work_dir)

    @property
    def extract_dir_name(self) -> str:
        return str(self.raw.get("extract_dir_name") or PATHS.extract_dir_name)

    @property
    def archive_name(self) -> str:
        return str(self.raw.get("archive_name") or DEFAULT_ARCHIVE_NAME)

    @property
    def install_args(self) -> str:
        args = self.raw.get("install_args")
        if args is None or not str(args).strip():
            return DEFAULT_INSTALL_ARGS
        return str(args)

    @property
    def packages(self) -> List[SoftwarePackage]:
        """Packages to process, in order.

        Falls back to a single package built from archive_name/install_args.
        A JSON string (as passed on the command line) is parsed here, so a
        malformed list surfaces inside the logged run.
        """
        items = self.raw.get("packages")
        if isinstance(items, str):
            items = parse_packages(items)
            if items:
                return items
        elif items:
            return packages_from_list(items)
        return [SoftwarePackage(name=self.archive_name, args=self.install_args)]

    @property
    def timeout_s(self) -> Optional[float]:
        """Child-process wait limit; None waits forever."""
        value = self.raw.get("timeout_s", DEFAULT_TIMEOUT_S)
        if value is None:
            return None
        value = float(value)
        return value if value > 0 else None

    @property
    def executable_extensions(self) -> Tuple[str, ...]:
        exts = self.raw.get("executable_extensions") or DEFAULT_EXECUTABLE_EXTENSIONS
        if isinstance(exts, str):
            exts = [exts]
        return tuple(e.lower() if e.startswith(".") else "." + e.lower() for e in exts)

    @property
    def strict_exit(self) -> bool:
        return bool(self.raw.get("strict_exit", False))

    def with_overrides(self, **overrides: Any) -> "InstallerConfig":
        """Return a copy with non-None overrides applied on top of raw."""
        merged = dict(self.raw)
        merged.update({k: v for k, v in overrides.items() if v is not None})
        return InstallerConfig(raw=merged)


def load_installer_config(path: str) -> InstallerConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    ext = p.suffix.lower()
    text = p.read_text(encoding="utf-8")
    if ext in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError("PyYAML is required to read YAML installer config") from e
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML in {p}: {e}") from e
    elif ext == ".json":
        raw = json.loads(text) if text.strip() else {}
    else:
        raise ValueError("installer config must be YAML or JSON")

    if not isinstance(raw, dict):
        raise ValueError(f"installer config must contain a mapping/object: {p}")

    cfg = InstallerConfig(raw=raw)
    # Validate early so a bad package list is reported as a config error.
    cfg.packages
    return cfg
