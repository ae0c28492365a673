"""
bundle.py
Utilities that make the program work as a portable, bundled tool.

Responsibilities
- Determine the "bundle root": where the binary (or script) lives.
- Prefer a local ./bin directory (next to the binary) for the sibling
  unmount-chroot / mount-chroot tools. Those tools are shipped with edit-chroot
  and must match its flag conventions (-y, -c, -k, -e); a system copy of the
  same name elsewhere on PATH may not.
- Provide DEFAULT_CONFIG_PATH that points to an adjacent `chrootedit.toml`.
"""
from __future__ import annotations
import os, sys
from pathlib import Path

def bundle_root() -> Path:
    """
    Return the directory that contains the program.
    - PyInstaller onefile: sys.executable points to the extracted binary; use parent.
    - Source run: look for main.py or a project root containing chrootedit.toml
    """
    if getattr(sys, "_MEIPASS", None):
        return Path(sys.executable).resolve().parent

    current = Path(__file__).resolve()
    for parent in [current.parent.parent] + list(current.parents):
        if (parent / "main.py").exists() or (parent / "chrootedit.toml").exists():
            return parent

    return current.parent.parent

BUNDLE_DIR: Path = bundle_root()
BIN_DIR: Path = (BUNDLE_DIR / "bin")
DEFAULT_CONFIG_PATH: str = str(BUNDLE_DIR / "chrootedit.toml")

def prepend_bin_to_path() -> None:
    """Prepend ./bin (next to the binary) to PATH so bundled sibling tools are preferred."""
    if BIN_DIR.is_dir():
        path = os.environ.get("PATH", "")
        if str(BIN_DIR) not in path.split(":"):
            os.environ["PATH"] = str(BIN_DIR) + ":" + path
