"""Boundary helpers for the provisioning side.

The provisioning descriptor stages the archive plus this installer on the
machine and triggers one run through a custom-script VM extension. These
helpers only build the extension settings and the documented command line;
they do not talk to any cloud API.
"""

from __future__ import annotations

import argparse
import json
import subprocess
import sys
from typing import Any, Dict, List, Optional, Sequence

from .models import SoftwarePackage
from .packages import PackageSpecError, dump_packages, parse_packages

DEFAULT_INTERPRETER = "python"
DEFAULT_MODULE = "firstboot_installer"


def build_command_line(
    packages: Optional[Sequence[SoftwarePackage]] = None,
    *,
    interpreter: str = DEFAULT_INTERPRETER,
    module: str = DEFAULT_MODULE,
    extra_args: Optional[Sequence[str]] = None,
) -> str:
    """interpreter -m module [extra args] [--packages '<json>'], Windows-quoted."""

    argv: List[str] = [interpreter, "-m", module]
    argv.extend(extra_args or [])
    if packages:
        argv.extend(["--packages", dump_packages(list(packages))])
    # The extension hands commandToExecute to cmd.exe on the target.
    return subprocess.list2cmdline(argv)


def build_extension_settings(
    file_uris: Sequence[str],
    packages: Optional[Sequence[SoftwarePackage]] = None,
    *,
    interpreter: str = DEFAULT_INTERPRETER,
    extra_args: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    if not file_uris:
        raise ValueError("at least one file URI is required")
    return {
        "fileUris": list(file_uris),
        "commandToExecute": build_command_line(packages, interpreter=interpreter, extra_args=extra_args),
    }


def _render(settings: Dict[str, Any], *, as_json: bool) -> str:
    if as_json:
        return json.dumps(settings, indent=2) + "\n"
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required for YAML output; use --json") from e
    return yaml.safe_dump(settings, sort_keys=False)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="firstboot-handoff")
    p.add_argument("--file-uri", action="append", required=True, help="URI to stage on the VM (repeatable)")
    p.add_argument("--packages", default=None, help="JSON list of {name, args} objects")
    p.add_argument("--interpreter", default=DEFAULT_INTERPRETER)
    p.add_argument("--json", action="store_true", help="Print JSON instead of YAML")

    args = p.parse_args(argv)

    try:
        packages = parse_packages(args.packages)
    except PackageSpecError as e:
        p.error(str(e))

    settings = build_extension_settings(args.file_uri, packages, interpreter=args.interpreter)
    sys.stdout.write(_render(settings, as_json=bool(args.json)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
