"""
discover.py
Read-only inventory of the chroots root for --list:
- which chroots exist
- whether each is encrypted (a keyfile pointer is present)
- where its keyfile lives
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Sequence
from .types import Config, ChrootInfo
from .keyfile import pointer_path, current_keyfile


def inspect_chroot(chroots: Path, name: str, cfg: Config) -> ChrootInfo:
    path = Path(chroots) / name.rstrip("/")
    info = ChrootInfo(name=name.rstrip("/"), path=path)
    if not path.is_dir():
        info.notes.append("missing")
        return info
    if pointer_path(path, cfg).is_file():
        info.encrypted = True
        key = current_keyfile(path, cfg)
        info.keyfile = str(key)
        if not key.is_file():
            info.notes.append("keyfile_missing")
    return info


def collect_chroots(chroots: Path, cfg: Config, names: Sequence[str] | None = None) -> List[ChrootInfo]:
    if names:
        return [inspect_chroot(chroots, n, cfg) for n in names]
    if not Path(chroots).is_dir():
        return []
    return [
        inspect_chroot(chroots, p.name, cfg)
        for p in sorted(Path(chroots).iterdir())
        if p.is_dir() and not p.is_symlink()
    ]


def print_plan(infos: List[ChrootInfo]) -> None:
    if not infos:
        print("[info] no chroots found")
        return
    print(f"{'NAME':24} {'ENCRYPTED':9} KEYFILE")
    for i in infos:
        enc = "yes" if i.encrypted else "no"
        key = i.keyfile or "-"
        notes = f"  ({', '.join(i.notes)})" if i.notes else ""
        print(f"{i.name:24} {enc:9} {key}{notes}")
