from __future__ import annotations

import logging
import shlex
import subprocess
import tempfile
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

# Installer output can be large; only the tail goes to the log.
OUTPUT_TAIL_BYTES = 4096


@dataclass(frozen=True)
class InstallerRun:
    argv: list[str]
    returncode: int
    output: str


def split_args(args: str) -> List[str]:
    """Split an installer argument string into argv entries.

    Windows-style switches keep their backslashes (/D=C:\\Program Files\\X
    must survive), so we split non-POSIX and strip one pair of surrounding
    quotes from each token.
    """

    out: List[str] = []
    for tok in shlex.split(args or "", posix=False):
        if len(tok) >= 2 and tok[0] == tok[-1] and tok[0] in "\"'":
            tok = tok[1:-1]
        out.append(tok)
    return out


def run_installer(
    argv: Sequence[str],
    *,
    cwd: str | None = None,
    timeout_s: Optional[float] = None,
) -> InstallerRun:
    """Start the installer and wait for that process alone to exit.

    Output goes to a temporary file rather than a pipe, so background
    processes the installer leaves running cannot hold the wait open. The
    output is decoded leniently after exit and only its tail is logged.
    timeout_s=None waits without limit; on timeout the installer is killed
    and subprocess.TimeoutExpired propagates.
    """

    argv_list = list(argv)
    logger.info("CMD %s", subprocess.list2cmdline(argv_list))

    with tempfile.TemporaryFile() as out:
        proc = subprocess.Popen(
            argv_list,
            stdin=subprocess.DEVNULL,
            stdout=out,
            stderr=subprocess.STDOUT,
            cwd=cwd,
        )
        try:
            returncode = proc.wait(timeout=timeout_s)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
            raise

        out.seek(0, 2)
        size = out.tell()
        out.seek(max(0, size - OUTPUT_TAIL_BYTES))
        output = out.read().decode("utf-8", errors="replace")

    if output.strip():
        logger.debug("OUTPUT %s", output.strip())

    return InstallerRun(argv=argv_list, returncode=returncode, output=output)
