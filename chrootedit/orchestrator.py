"""
orchestrator.py
Runs the edit workflow over the requested chroots, strictly in command-line order:
  unmount -> delete (terminal)
          -> [re-key] -> [encrypt/rewrap] -> [move]
The first failure aborts the batch; nothing is rolled back.
"""

from __future__ import annotations
import sys
from pathlib import Path
from .types import Config, EditRequest
from .bundle import prepend_bin_to_path
from .util import run, confirm, CleanupStack, restore_echo
from .errors import OperationError
from .mounter import unmount_chroot, encrypt_chroot
from .keyfile import rekey
from .mover import move_target, move_chroot


class EditSession:
    """Mutable state for one batch: an "a" answer turns on confirm-all for the rest."""

    def __init__(self, cfg: Config, req: EditRequest, cleanup: CleanupStack):
        self.cfg = cfg
        self.req = req
        self.cleanup = cleanup
        self.confirm_all = req.confirm_all

    def delete(self, name: str, chroot: Path) -> None:
        if not self.confirm_all:
            answer = confirm(f"Delete {chroot}?", f"Aborting deletion of {chroot}")
            if answer == "all":
                self.confirm_all = True
        print(f"[info] Deleting {chroot}", file=sys.stderr)
        rc = run(["rm", "-rf", "--one-file-system", str(chroot)], dry=self.req.dry_run)
        if rc != 0:
            raise OperationError(f"Failed to delete {chroot} (rc={rc})")

    def process(self, name: str) -> None:
        req, cfg = self.req, self.cfg
        name = name.rstrip("/")
        chroot = Path(req.chroots_dir) / name

        unmount_chroot(cfg, req.chroots_dir, name, confirm_all=self.confirm_all, dry=req.dry_run)

        if req.delete:
            self.delete(name, chroot)
            return

        keyfile = None
        if req.keyfile:
            keyfile = rekey(chroot, name, req.keyfile, cfg,
                            encrypt=req.encrypt > 0, move_pending=bool(req.move), dry=req.dry_run)

        if req.encrypt:
            encrypt_chroot(cfg, req.chroots_dir, name, keyfile, req.encrypt,
                           self.cleanup, dry=req.dry_run)

        if req.move:
            target = move_target(req.move, chroot, name)
            if move_chroot(chroot, target, confirm_all=self.confirm_all, dry=req.dry_run,
                           cleanup=self.cleanup):
                self.confirm_all = True


def run_edits(cfg: Config, req: EditRequest, cleanup: CleanupStack | None = None) -> int:
    prepend_bin_to_path()
    if cleanup is None:
        cleanup = CleanupStack()
        cleanup.install()
    cleanup.push(restore_echo)

    session = EditSession(cfg, req, cleanup)
    try:
        for name in req.names:
            session.process(name)
    finally:
        cleanup.run_all()
    print(f"[ok] {len(req.names)} chroot(s) processed.", file=sys.stderr)
    return 0
