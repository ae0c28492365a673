"""
types.py
Dataclasses used across modules: Config, EditRequest, ChrootInfo.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List

@dataclass
class Config:
    # paths
    chroots_dir: Path = Path("/usr/local/chroots")
    keyfile_name: str = ".ecryptfs"
    # tools
    unmount_cmd: str = "unmount-chroot"
    mount_cmd: str = "mount-chroot"
    # xinit
    xinit_bin: str = "/usr/bin/xinit"
    xserverrc: str = "/etc/chrootedit/xserverrc"
    x_lock_dir: Path = Path("/tmp")

@dataclass
class EditRequest:
    chroots_dir: Path
    names: List[str]
    delete: bool = False
    encrypt: int = 0
    keyfile: Optional[str] = None
    move: Optional[str] = None
    confirm_all: bool = False
    dry_run: bool = False

@dataclass
class ChrootInfo:
    name: str
    path: Path
    encrypted: bool = False
    keyfile: Optional[str] = None
    notes: List[str] = field(default_factory=list)
