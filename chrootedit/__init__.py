"""
chrootedit package
- Edit chroot directories (delete, re-key, encrypt, move) and launch X on a free display.
"""
__all__ = ["cli", "config", "orchestrator", "discover", "mounter", "keyfile", "mover", "display", "xinit", "util", "types", "errors", "bundle"]
__version__ = "0.3.0"
