#!/usr/bin/env python3
"""
xinit.py
chroot-xinit: pick the first free X display and exec xinit with the chroot
xserverrc. All arguments are passed through to xinit.
"""
from __future__ import annotations
import os, sys
from .config import find_config, load_config
from .display import build_xinit_args, find_free_display


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        cfg = load_config(find_config(os.environ.get("CHROOTEDIT_CONFIG")))
    except Exception as e:
        print(f"[error] Invalid configuration: {e}", file=sys.stderr)
        return 1

    display = find_free_display(cfg.x_lock_dir)
    xargs = build_xinit_args(args, display, cfg.xserverrc)
    try:
        os.execv(cfg.xinit_bin, [cfg.xinit_bin] + xargs)
    except OSError as e:
        print(f"[error] Cannot exec {cfg.xinit_bin}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
