import json
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from gatewarden.utils import atomic_write, write_json_atomic


class TestAtomicWrite:
    def test_creates_parent_directories(self, fs: FakeFilesystem) -> None:
        path = Path("/state/nested/file.txt")

        atomic_write(path, "hello")

        assert path.read_text() == "hello"

    def test_replaces_existing_content(self, fs: FakeFilesystem) -> None:
        fs.create_file("/state/file.txt", contents="old")

        atomic_write(Path("/state/file.txt"), b"new")

        assert Path("/state/file.txt").read_bytes() == b"new"
        assert [p.name for p in Path("/state").iterdir()] == ["file.txt"]

    def test_failure_leaves_no_temp_file(self, fs: FakeFilesystem) -> None:
        # A directory where the file should go makes the final rename fail
        fs.create_dir("/state/file.txt")

        with pytest.raises(OSError):
            atomic_write(Path("/state/file.txt"), "data")

        assert [p.name for p in Path("/state").iterdir()] == ["file.txt"]


def test_write_json_atomic_is_indented(fs: FakeFilesystem) -> None:
    path = Path("/state/data.json")

    write_json_atomic(path, {"version": 1, "allowFrom": ["42"]})

    text = path.read_text()
    assert text.endswith("\n")
    assert '  "version": 1' in text
    assert json.loads(text) == {"version": 1, "allowFrom": ["42"]}
