"""
Pytest configuration and shared fixtures.
"""
import io
import os
import stat
import pytest
from pathlib import Path
from chrootedit.types import Config
from chrootedit.util import CleanupStack


FAKE_TOOL = """#!/bin/sh
echo "$(basename "$0") $*" >> "{log}"
exit {rc}
"""


@pytest.fixture(autouse=True)
def quiet_session(monkeypatch):
    """No real TTY, and no process-wide signal handlers installed by the code under test."""
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    monkeypatch.setattr(CleanupStack, "install", lambda self: None)


@pytest.fixture
def answer(monkeypatch):
    """Feed a line to the next confirmation prompt."""
    def _answer(text: str):
        monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return _answer


@pytest.fixture
def as_root(monkeypatch):
    monkeypatch.setattr(os, "geteuid", lambda: 0)


@pytest.fixture
def chroots_dir(tmp_path):
    root = tmp_path / "chroots"
    root.mkdir()
    return root


@pytest.fixture
def make_chroot(chroots_dir):
    def _make(name: str) -> Path:
        c = chroots_dir / name
        (c / "etc").mkdir(parents=True)
        (c / "etc" / "hostname").write_text(f"{name}\n")
        return c
    return _make


@pytest.fixture
def tool_log(tmp_path):
    return tmp_path / "tools.log"


@pytest.fixture
def make_tool(tmp_path, tool_log):
    """Write a fake sibling tool that logs its argv and exits with rc."""
    bindir = tmp_path / "bin"
    bindir.mkdir(exist_ok=True)

    def _make(name: str, rc: int = 0) -> Path:
        p = bindir / name
        p.write_text(FAKE_TOOL.format(log=tool_log, rc=rc))
        p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return p
    return _make


@pytest.fixture
def sample_config(chroots_dir, make_tool, tmp_path):
    """Config wired to fake unmount-chroot / mount-chroot tools."""
    return Config(
        chroots_dir=chroots_dir,
        keyfile_name=".ecryptfs",
        unmount_cmd=str(make_tool("unmount-chroot")),
        mount_cmd=str(make_tool("mount-chroot")),
        xinit_bin="/usr/bin/xinit",
        xserverrc="/etc/chrootedit/xserverrc",
        x_lock_dir=tmp_path,
    )


@pytest.fixture
def config_file(tmp_path, sample_config):
    """A TOML config equivalent to sample_config, for CLI tests."""
    p = tmp_path / "chrootedit.toml"
    p.write_text(f"""
[paths]
chroots = "{sample_config.chroots_dir}"
keyfile_name = ".ecryptfs"

[tools]
unmount = "{sample_config.unmount_cmd}"
mount = "{sample_config.mount_cmd}"

[xinit]
binary = "/usr/bin/xinit"
xserverrc = "/etc/chrootedit/xserverrc"
lock_dir = "{tmp_path}"
""")
    return p


@pytest.fixture
def tool_calls(tool_log):
    """Lines logged by the fake tools so far."""
    def _calls():
        return tool_log.read_text().splitlines() if tool_log.exists() else []
    return _calls
