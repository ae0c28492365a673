"""
util.py
Cross-cutting utilities:
- Process execution (argument list) with dry-run support
- Confirmation prompts with the a/y/N convention
- Filesystem identity helpers (nearest existing ancestor, same-device test)
- CleanupStack: LIFO cleanup run on SIGINT/SIGHUP/SIGTERM and at exit
"""

from __future__ import annotations
import atexit, os, shlex, signal, subprocess, sys
from pathlib import Path
from typing import Callable, List
from .errors import UsageError


def run(cmd, dry=False) -> int:
    """
    Execute a command given as an argument list; returns its exit status.
    In dry-run mode the command is only printed.
    """
    cmd_list = [str(c) for c in cmd]
    if dry:
        print("[dry-run]", " ".join(shlex.quote(c) for c in cmd_list), file=sys.stderr)
        return 0
    return subprocess.call(cmd_list)


def ensure_dir(p: Path):
    """Create directory with better error reporting."""
    try:
        p.mkdir(parents=True, exist_ok=True)
    except PermissionError:
        raise PermissionError(f"Cannot create directory {p} - insufficient permissions")
    except OSError as e:
        raise OSError(f"Cannot create directory {p}: {e}")


def confirm(prompt: str, abort_message: str) -> str:
    """
    Ask on stderr, read one line from stdin.
    Returns "all" for an answer starting with a/A, "yes" for y/Y.
    Anything else (including EOF) raises UsageError(abort_message).
    """
    print(f"{prompt} [a/y/N] ", end="", file=sys.stderr, flush=True)
    response = sys.stdin.readline().lstrip()
    first = response[:1]
    if first in ("a", "A"):
        return "all"
    if first in ("y", "Y"):
        return "yes"
    raise UsageError(abort_message)


def nearest_existing(path: Path) -> Path:
    """Walk upward from path until an existing entry is found."""
    cur = Path(os.path.abspath(path))
    while not cur.exists() and cur != cur.parent:
        cur = cur.parent
    return cur


def same_filesystem(a: Path, b: Path) -> bool:
    return nearest_existing(a).stat().st_dev == nearest_existing(b).stat().st_dev


def restore_echo() -> None:
    if sys.stdin is not None and sys.stdin.isatty():
        run(["stty", "echo"])


class CleanupStack:
    """
    Cleanup callables run most-recent-first, each at most once.
    install() hooks SIGINT/SIGHUP/SIGTERM (exit 128+signum after cleanup) and atexit.
    """

    SIGNALS = (signal.SIGINT, signal.SIGHUP, signal.SIGTERM)

    def __init__(self):
        self._items: List[Callable[[], None]] = []
        self._installed = False

    def push(self, fn: Callable[[], None]) -> Callable[[], None]:
        self._items.append(fn)
        return fn

    def discard(self, fn: Callable[[], None]) -> None:
        if fn in self._items:
            self._items.remove(fn)

    def run_all(self) -> None:
        while self._items:
            fn = self._items.pop()
            try:
                fn()
            except Exception as e:
                print(f"[warn] cleanup step failed: {e}", file=sys.stderr)

    def _on_signal(self, signum, _frame):
        print(f"\n[warn] Interrupted by signal {signum}; cleaning up.", file=sys.stderr)
        self.run_all()
        sys.exit(128 + signum)

    def install(self) -> None:
        if self._installed:
            return
        self._installed = True
        atexit.register(self.run_all)
        for sig in self.SIGNALS:
            signal.signal(sig, self._on_signal)
