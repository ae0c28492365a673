"""
display.py
Free X display selection and xinit argument assembly.

The probe is not atomic: two launchers racing can pick the same number, the
same as upstream X tooling. The X server itself will then refuse the second one.
"""

from __future__ import annotations
import re
from pathlib import Path
from typing import List, Sequence

DISPLAY_RE = re.compile(r"^:\d+$")


def lock_path(lock_dir: Path, n: int) -> Path:
    return Path(lock_dir) / f".X{n}-lock"


def find_free_display(lock_dir: Path = Path("/tmp")) -> int:
    """Smallest n >= 0 with no <lock_dir>/.X<n>-lock."""
    n = 0
    while lock_path(lock_dir, n).exists():
        n += 1
    return n


def build_xinit_args(args: Sequence[str], display: int, xserverrc: str) -> List[str]:
    """
    xinit [client args] -- [server] [display] [server options]

    The first argument after `--` is taken as the server program when it is an
    absolute path; otherwise xserverrc is inserted there. A `:N` display is
    inserted after the server program unless the caller already gave one.
    """
    args = list(args)
    if "--" in args:
        i = args.index("--")
        client, server = args[:i], args[i + 1:]
    else:
        client, server = args, []

    if not server or not server[0].startswith("/"):
        server = [xserverrc] + server

    if not any(DISPLAY_RE.match(a) for a in server[1:]):
        server = [server[0], f":{display}"] + server[1:]

    return client + ["--"] + server
