"""
keyfile.py
The per-chroot key pointer file and key relocation.

Layout of <chroot>/<keyfile_name> (".ecryptfs" by default):
  - key stored inside the chroot: first line blank, key material follows
  - key stored elsewhere: first line is the absolute path of the real keyfile
A relocated keyfile always starts with a blank line followed by the key
material copied verbatim from line 2 onward of the old file.
"""

from __future__ import annotations
import os, sys
from pathlib import Path
from .types import Config
from .errors import OperationError

MOVE_BACK = "-"


def pointer_path(chroot: Path, cfg: Config) -> Path:
    return Path(chroot) / cfg.keyfile_name


def current_keyfile(chroot: Path, cfg: Config) -> Path:
    """Where the key lives now: the pointer's first line if set, else the pointer itself."""
    ptr = pointer_path(chroot, cfg)
    if ptr.is_file():
        with open(ptr, "r", encoding="utf-8", errors="replace") as f:
            header = f.readline().strip()
        if header:
            return Path(header)
    return ptr


def requested_keyfile(arg: str, chroot: Path, name: str, cfg: Config, cwd: str | None = None) -> Path:
    """Resolve a -k argument to a keyfile path for chroot `name`."""
    if arg == MOVE_BACK:
        return pointer_path(chroot, cfg)
    keyfile = arg
    if not os.path.isabs(keyfile):
        keyfile = os.path.join(cwd or os.getcwd(), keyfile)
    if keyfile.endswith("/") or os.path.isdir(keyfile):
        keyfile = os.path.join(keyfile.rstrip("/") or "/", name)
    return Path(os.path.normpath(keyfile))


def _write_private(path: Path, data: str) -> None:
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(data)


def same_keyfile(a: Path, b: Path) -> bool:
    """True when both paths name one file, however each is spelled (symlinks, relative roots)."""
    if a == b:
        return True
    return a.exists() and b.exists() and os.path.samefile(a, b)


def relocate_keyfile(old: Path, new: Path, pointer: Path, dry: bool = False) -> None:
    print(f"[info] Moving key file from {old} to {new}", file=sys.stderr)
    if dry:
        return
    with open(old, "r", encoding="utf-8", errors="surrogateescape") as f:
        lines = f.readlines()
    new.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(new, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape") as f:
        f.write("\n")
        f.writelines(lines[1:])
    old.unlink()
    if not same_keyfile(new, pointer):
        _write_private(pointer, f"{new}\n")


def rekey(chroot: Path, name: str, arg: str, cfg: Config,
          encrypt: bool = False, move_pending: bool = False, dry: bool = False) -> Path:
    """
    Move the key of `chroot` to the location `arg` asks for.
    Returns the resolved new keyfile path (handed to mount-chroot when encrypting).
    """
    old = Path(os.path.normpath(current_keyfile(chroot, cfg)))
    new = requested_keyfile(arg, chroot, name, cfg)
    pointer = pointer_path(chroot, cfg)

    if not old.is_file():
        if not encrypt:
            raise OperationError(f"Old key file {old} not found for {name}; is {name} encrypted?")
        return new
    if not same_keyfile(old, new):
        relocate_keyfile(old, new, pointer, dry=dry)
    elif not encrypt and not move_pending:
        print(f"[info] Key file for {name} is already located at {new}", file=sys.stderr)
    return new
