"""
mover.py
Move or rename a chroot.

Same filesystem: atomic rename. Different filesystems: cp -a --one-file-system,
then rm -rf --one-file-system of the source once the copy has succeeded. An
interrupted cross-filesystem move leaves the source intact; the partial
destination can be deleted and the move re-run.
"""

from __future__ import annotations
import os, sys
from pathlib import Path
from .util import run, ensure_dir, same_filesystem, confirm, CleanupStack
from .errors import OperationError


def move_target(move_arg: str, chroot: Path, name: str) -> Path:
    """
    - bare name (no separator): rename inside the chroot's parent directory
    - trailing separator: directory, the chroot name is appended
    - anything else: the full destination path
    """
    if "/" not in move_arg:
        return Path(chroot).parent / move_arg
    if move_arg.endswith("/"):
        return Path(move_arg) / name
    return Path(move_arg)


def move_chroot(chroot: Path, target: Path, confirm_all: bool = False, dry: bool = False,
                cleanup: CleanupStack | None = None) -> bool:
    """
    Move chroot to target. Returns True when the operator answered "all" to the
    cross-filesystem prompt, so the caller can stop asking for the rest of the batch.
    """
    if os.path.lexists(target):
        raise OperationError(f"{target} already exists; refusing to overwrite it")

    all_answer = False
    if same_filesystem(chroot, target.parent):
        print(f"[info] Moving {chroot} to {target}", file=sys.stderr)
        if not dry:
            ensure_dir(target.parent)
            chroot.rename(target)
        return all_answer

    print(f"[warn] Moving {chroot} across filesystems to {target}", file=sys.stderr)
    print("[warn] This will take some time. If the move is interrupted, it is safe to",
          file=sys.stderr)
    print(f"[warn] delete {target} and run the move again.", file=sys.stderr)
    if not confirm_all:
        answer = confirm("Are you sure you want to continue?", f"Aborting move of {chroot}")
        all_answer = answer == "all"
    if not dry:
        ensure_dir(target.parent)

    def partial_note():
        print(f"[warn] {target} may be a partial copy; {chroot} is intact. Delete {target} and re-run the move.",
              file=sys.stderr)

    if cleanup is not None:
        cleanup.push(partial_note)
    rc = run(["cp", "-a", "--one-file-system", str(chroot), str(target)], dry=dry)
    if cleanup is not None:
        cleanup.discard(partial_note)
    if rc != 0:
        raise OperationError(f"Copy of {chroot} to {target} failed (rc={rc}); source left intact")
    rc = run(["rm", "-rf", "--one-file-system", str(chroot)], dry=dry)
    if rc != 0:
        raise OperationError(f"Copied to {target}, but removing {chroot} failed (rc={rc})")
    return all_answer
