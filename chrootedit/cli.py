#!/usr/bin/env python3
"""
cli.py
Command-line interface for edit-chroot / delete-chroot.
Parses arguments, validates them, loads config, and invokes the orchestrator.
Invoked under a name containing "delete", the tool runs in delete mode.
"""
from __future__ import annotations
import argparse, os, sys
from pathlib import Path
from .bundle import DEFAULT_CONFIG_PATH
from .config import find_config, load_config
from .discover import collect_chroots, print_plan
from .errors import ChrootEditError, UsageError, OperationError
from .keyfile import MOVE_BACK
from .orchestrator import run_edits
from .types import EditRequest


def check_root_access() -> None:
    if os.geteuid() != 0:
        raise OperationError(f"{os.path.basename(sys.argv[0]) or 'edit-chroot'} must be run as root.")


def validate_arguments(args) -> None:
    """Usage rules, checked before anything touches a chroot."""
    if not args.names:
        raise UsageError("at least one chroot name is required")

    if args.delete and (args.encrypt or args.keyfile or args.move):
        raise UsageError("-d cannot be combined with -e, -k or -m")

    if len(args.names) > 1:
        if args.keyfile and args.keyfile != MOVE_BACK:
            if not (args.keyfile.endswith("/") or os.path.isdir(args.keyfile)):
                raise UsageError("with multiple chroots, -k must name a directory")
        if args.move and not args.move.endswith("/"):
            raise UsageError("with multiple chroots, -m must end in '/'")


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=prog,
        description="Edit chroots: delete, move, encrypt, or relocate their keyfiles.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="\nChroots are unmounted before any change. Deletes and moves require root.",
    )
    ap.add_argument("-c", "--chroots", default=None,
                    help="directory the chroots are in (default from config, /usr/local/chroots)")
    ap.add_argument("-d", "--delete", action="store_true", help="delete the specified chroots")
    ap.add_argument("-e", "--encrypt", action="count", default=0,
                    help="encrypt the chroot; give twice (-ee) to change the passphrase")
    ap.add_argument("-k", "--keyfile", default=None,
                    help="move the keyfile to KEYFILE ('-' moves it back into the chroot)")
    ap.add_argument("-m", "--move", default=None,
                    help="move the chroot; a trailing '/' means into that directory")
    ap.add_argument("-y", "--yes", action="store_true", help="do not prompt for confirmation")
    ap.add_argument("-l", "--list", action="store_true", help="list chroots and their keyfiles")
    ap.add_argument("--dry-run", action="store_true", help="show actions without executing")
    ap.add_argument("--config", default=None,
                    help=f"path to chrootedit.toml (default: {DEFAULT_CONFIG_PATH} then /etc/chrootedit.toml)")
    ap.add_argument("names", nargs="*", metavar="NAME", help="chroot name(s)")
    return ap


def main(argv=None, prog: str | None = None) -> int:
    prog = prog or os.path.basename(sys.argv[0])
    ap = build_parser(prog)
    try:
        args = ap.parse_args(argv)
    except SystemExit as e:
        return 2 if e.code not in (0, None) else 0

    if "delete" in prog:
        args.delete = True

    try:
        cfg = load_config(find_config(args.config))
        chroots = Path(args.chroots) if args.chroots else cfg.chroots_dir

        if args.list:
            print_plan(collect_chroots(chroots, cfg, args.names or None))
            return 0

        validate_arguments(args)
        if not args.dry_run:
            check_root_access()

        req = EditRequest(
            chroots_dir=chroots,
            names=list(args.names),
            delete=args.delete,
            encrypt=args.encrypt,
            keyfile=args.keyfile,
            move=args.move,
            confirm_all=args.yes,
            dry_run=args.dry_run,
        )
        return run_edits(cfg, req)

    except UsageError as e:
        print(f"[error] {e}", file=sys.stderr)
        ap.print_usage(sys.stderr)
        return e.exit_code
    except ChrootEditError as e:
        print(f"[error] {e}", file=sys.stderr)
        return e.exit_code
    except FileNotFoundError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\n[warn] Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"[error] Unexpected error: {e}", file=sys.stderr)
        return 1


def delete_main(argv=None) -> int:
    return main(argv, prog="delete-chroot")


if __name__ == "__main__":
    sys.exit(main())
