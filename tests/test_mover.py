"""
Tests for move target computation and same/cross filesystem moves.
"""
import pytest
from pathlib import Path
from chrootedit import mover
from chrootedit.errors import OperationError, UsageError
from chrootedit.mover import move_target, move_chroot
from chrootedit.util import CleanupStack


def test_target_bare_name_renames_in_place(chroots_dir):
    assert move_target("trusty", chroots_dir / "precise", "precise") == chroots_dir / "trusty"


def test_target_trailing_separator_appends_name():
    assert move_target("/media/usb/", Path("/usr/local/chroots/precise"), "precise") == Path("/media/usb/precise")


def test_target_full_path_is_verbatim():
    assert move_target("/media/usb/old", Path("/usr/local/chroots/precise"), "precise") == Path("/media/usb/old")


def test_same_filesystem_renames(make_chroot, chroots_dir, monkeypatch):
    src = make_chroot("precise")
    ino = src.stat().st_ino
    monkeypatch.setattr(mover, "run", lambda *a, **kw: pytest.fail("no subprocess expected"))

    target = chroots_dir / "trusty"
    move_chroot(src, target)

    assert not src.exists()
    assert target.stat().st_ino == ino
    assert (target / "etc" / "hostname").read_text() == "precise\n"


def test_same_filesystem_creates_parent(make_chroot, tmp_path):
    src = make_chroot("precise")
    target = tmp_path / "elsewhere" / "deep" / "precise"
    move_chroot(src, target)
    assert target.is_dir()


def test_existing_target_is_refused(make_chroot, chroots_dir):
    src = make_chroot("precise")
    make_chroot("trusty")
    with pytest.raises(OperationError) as exc:
        move_chroot(src, chroots_dir / "trusty")
    assert exc.value.exit_code == 1
    assert src.is_dir()
    assert (chroots_dir / "trusty" / "etc" / "hostname").read_text() == "trusty\n"


def test_cross_filesystem_copies_then_removes(make_chroot, tmp_path, monkeypatch, answer):
    src = make_chroot("precise")
    target = tmp_path / "usb" / "precise"
    monkeypatch.setattr(mover, "same_filesystem", lambda a, b: False)
    answer("y\n")

    assert move_chroot(src, target) is False

    assert not src.exists()
    assert (target / "etc" / "hostname").read_text() == "precise\n"


def test_cross_filesystem_all_answer_is_reported(make_chroot, tmp_path, monkeypatch, answer):
    src = make_chroot("precise")
    monkeypatch.setattr(mover, "same_filesystem", lambda a, b: False)
    answer("a\n")
    assert move_chroot(src, tmp_path / "usb" / "precise") is True


def test_cross_filesystem_declined_leaves_everything(make_chroot, tmp_path, monkeypatch, answer):
    src = make_chroot("precise")
    target = tmp_path / "usb" / "precise"
    monkeypatch.setattr(mover, "same_filesystem", lambda a, b: False)
    answer("n\n")

    with pytest.raises(UsageError):
        move_chroot(src, target)

    assert src.is_dir()
    assert not target.exists()


def test_cross_filesystem_failed_copy_keeps_source(make_chroot, tmp_path, monkeypatch):
    src = make_chroot("precise")
    calls = []

    def fake_run(cmd, **kw):
        calls.append(cmd[0])
        return 1 if cmd[0] == "cp" else 0

    monkeypatch.setattr(mover, "same_filesystem", lambda a, b: False)
    monkeypatch.setattr(mover, "run", fake_run)

    with pytest.raises(OperationError):
        move_chroot(src, tmp_path / "usb" / "precise", confirm_all=True)

    assert calls == ["cp"]
    assert src.is_dir()


def test_cross_filesystem_confirm_all_skips_prompt(make_chroot, tmp_path, monkeypatch):
    src = make_chroot("precise")
    cmds = []
    monkeypatch.setattr(mover, "same_filesystem", lambda a, b: False)
    monkeypatch.setattr(mover, "run", lambda cmd, **kw: cmds.append(cmd) or 0)

    move_chroot(src, tmp_path / "usb" / "precise", confirm_all=True)

    assert cmds[0][:3] == ["cp", "-a", "--one-file-system"]
    assert cmds[1] == ["rm", "-rf", "--one-file-system", str(src)]


def test_interrupted_copy_reports_partial_destination(make_chroot, tmp_path, monkeypatch, capsys):
    src = make_chroot("precise")
    target = tmp_path / "usb" / "precise"
    stack = CleanupStack()

    def interrupted_cp(cmd, **kw):
        if cmd[0] == "cp":
            stack.run_all()
            raise KeyboardInterrupt
        return 0

    monkeypatch.setattr(mover, "same_filesystem", lambda a, b: False)
    monkeypatch.setattr(mover, "run", interrupted_cp)

    with pytest.raises(KeyboardInterrupt):
        move_chroot(src, target, confirm_all=True, cleanup=stack)

    err = capsys.readouterr().err
    assert f"{target} may be a partial copy" in err
    assert src.is_dir()


def test_partial_copy_note_removed_after_copy(make_chroot, tmp_path, monkeypatch, capsys):
    src = make_chroot("precise")
    stack = CleanupStack()
    monkeypatch.setattr(mover, "same_filesystem", lambda a, b: False)
    monkeypatch.setattr(mover, "run", lambda cmd, **kw: 0)

    move_chroot(src, tmp_path / "usb" / "precise", confirm_all=True, cleanup=stack)
    capsys.readouterr()
    stack.run_all()
    assert "partial copy" not in capsys.readouterr().err
