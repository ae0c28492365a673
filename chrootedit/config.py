"""
config.py
Load configuration from TOML (Python 3.11+ tomllib).
Search order:
  1) explicit --config path
  2) adjacent DEFAULT_CONFIG_PATH (bundle root / 'chrootedit.toml')
  3) /etc/chrootedit.toml
If nothing is found the built-in defaults apply.
"""

from __future__ import annotations
import tomllib
from pathlib import Path
from typing import Any, Dict
from .types import Config
from .errors import OperationError
from .bundle import DEFAULT_CONFIG_PATH

SYSTEM_CONFIG_PATH = Path("/etc/chrootedit.toml")


def _gv(d: Dict[str, Any], path: list[str], default=None):
    cur = d
    for k in path:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise OperationError(f"Invalid configuration file {path}: {e}")


def find_config(path_arg: str | None) -> Path | None:
    """Pick the best config path based on CLI arg and availability."""
    if path_arg:
        p = Path(path_arg)
        if not p.exists():
            raise FileNotFoundError(f"Specified config file does not exist: {path_arg}")
        return p

    for p in (Path(DEFAULT_CONFIG_PATH), SYSTEM_CONFIG_PATH):
        if p.exists():
            return p
    return None


def load_config(path: Path | None) -> Config:
    if path is None:
        return Config()
    cfg = _load_toml(path)
    d = Config()

    def gv(keys, default=None):
        return _gv(cfg, keys, default)

    return Config(
        chroots_dir=Path(gv(["paths", "chroots"], str(d.chroots_dir))),
        keyfile_name=gv(["paths", "keyfile_name"], d.keyfile_name),
        unmount_cmd=gv(["tools", "unmount"], d.unmount_cmd),
        mount_cmd=gv(["tools", "mount"], d.mount_cmd),
        xinit_bin=gv(["xinit", "binary"], d.xinit_bin),
        xserverrc=gv(["xinit", "xserverrc"], d.xserverrc),
        x_lock_dir=Path(gv(["xinit", "lock_dir"], str(d.x_lock_dir))),
    )
