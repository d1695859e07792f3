"""External command and filesystem access used by every provider.

Providers never call ``subprocess`` or ``os.path`` directly: they receive a
runner and a ``FileSystem`` so tests can hand them fakes.
"""

from __future__ import annotations

import os
import subprocess
from typing import Callable, Sequence

from brodef.log import debug_detail

DEFAULT_TIMEOUT_S = 60

Runner = Callable[[str, Sequence[str]], str]


def run_command(command: str, arguments: Sequence[str] = (), timeout: float = DEFAULT_TIMEOUT_S) -> str:
    """Run ``command`` without a shell and return its stdout.

    Returns an empty string when the command is missing, exits non-zero,
    times out or cannot be read. Never raises.
    """
    argv = [command, *arguments]
    try:
        result = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError, ValueError) as exc:
        debug_detail(f"{command} failed to run: {exc}")
        return ""
    if result.returncode != 0:
        debug_detail(f"{command} exited with status {result.returncode}")
        return ""
    return result.stdout or ""


class FileSystem:
    """Existence checks against the local filesystem."""

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)
