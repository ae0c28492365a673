"""
mounter.py
Delegation to the sibling chroot tools.

unmount-chroot both validates that the chroot exists and releases its mounts;
mount-chroot does the actual ecryptfs setup (-e) or passphrase rewrap (-ee).
Any non-zero exit is fatal for the whole batch.
"""

from __future__ import annotations
from pathlib import Path
from .types import Config
from .util import run, CleanupStack
from .errors import DelegateError


def unmount_chroot(cfg: Config, chroots: Path, name: str, confirm_all: bool = False, dry: bool = False) -> None:
    cmd = [cfg.unmount_cmd]
    if confirm_all:
        cmd.append("-y")
    cmd += ["-c", str(chroots), "--", name]
    rc = run(cmd, dry=dry)
    if rc != 0:
        raise DelegateError(cfg.unmount_cmd, rc)


def mount_chroot(cfg: Config, chroots: Path, name: str, keyfile: Path | None = None,
                 encrypt_level: int = 1, dry: bool = False) -> None:
    cmd = [cfg.mount_cmd]
    if keyfile is not None:
        cmd += ["-k", str(keyfile)]
    if encrypt_level > 0:
        cmd.append("-" + "e" * encrypt_level)
    cmd += ["-c", str(chroots), "--", name]
    rc = run(cmd, dry=dry)
    if rc != 0:
        raise DelegateError(cfg.mount_cmd, rc)


def encrypt_chroot(cfg: Config, chroots: Path, name: str, keyfile: Path | None,
                   encrypt_level: int, cleanup: CleanupStack, dry: bool = False) -> None:
    """
    Encrypt (or rewrap) via mount-chroot, leaving the chroot unmounted afterwards.
    If mount-chroot fails or is interrupted, the guard left on the cleanup stack unmounts.
    """

    def guard():
        run([cfg.unmount_cmd, "-y", "-c", str(chroots), "--", name], dry=dry)

    cleanup.push(guard)
    mount_chroot(cfg, chroots, name, keyfile, encrypt_level, dry=dry)
    cleanup.discard(guard)
    unmount_chroot(cfg, chroots, name, confirm_all=True, dry=dry)
