"""Test configuration and fixtures for fsmeta-tools."""

import os
import stat

import pytest

from fsmeta_tools.filesystem import traversal


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def marker_whiteouts(monkeypatch):
    """Treat empty regular files as whiteouts.

    Real whiteouts are 0:0 character devices, which need CAP_MKNOD to create.
    With this fixture active, ``touch``-ed files play that role and files
    with content stay ordinary entries.
    """

    def is_marker(st):
        return stat.S_ISREG(st.st_mode) and st.st_size == 0

    monkeypatch.setattr(traversal, "is_whiteout", is_marker)

    def make(path):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        return path

    return make


@pytest.fixture
def make_whiteout():
    """Create a real overlayfs-style whiteout, skipping when not permitted."""

    def make(path):
        try:
            os.mknod(path, stat.S_IFCHR | 0o600, os.makedev(0, 0))
        except OSError as e:
            pytest.skip(f"cannot create character devices here: {e}")
        return path

    return make


@pytest.fixture
def sample_tree(temp_dir):
    """Create a small tree of ordinary files and directories."""
    (temp_dir / "file1.txt").write_text("content1")
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    (subdir / "file2.txt").write_text("content2")
    nested = subdir / "nested"
    nested.mkdir()
    (nested / "file3.txt").write_text("content3")
    return temp_dir
