"""Tests for goldfolio.core.utils.file_io."""

import os

import pytest

from goldfolio.core.exceptions import FileIOError
from goldfolio.core.utils.file_io import backup_file, read_json, safe_write, write_json


class TestSafeWrite:
    def test_creates_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "sub", "file.txt")
        safe_write(path, "hello")
        with open(path) as f:
            assert f.read() == "hello"

    def test_creates_parent_dirs(self, tmp_dir):
        path = os.path.join(tmp_dir, "a", "b", "c.txt")
        safe_write(path, "nested")
        assert os.path.exists(path)


class TestBackupFile:
    def test_backup_beside_original(self, tmp_dir):
        path = os.path.join(tmp_dir, "data.json")
        safe_write(path, "{}")
        backup = backup_file(path)
        assert backup is not None
        assert os.path.dirname(backup) == tmp_dir
        assert os.path.basename(backup).startswith("data.json.backup.")

    def test_backup_into_dir(self, tmp_dir):
        path = os.path.join(tmp_dir, "data.json")
        safe_write(path, "{}")
        backup = backup_file(path, os.path.join(tmp_dir, "backups"))
        assert backup.startswith(os.path.join(tmp_dir, "backups"))
        with open(backup) as f:
            assert f.read() == "{}"

    def test_missing_source(self, tmp_dir):
        assert backup_file(os.path.join(tmp_dir, "missing.json")) is None


class TestJson:
    def test_write_then_read(self, tmp_dir):
        path = os.path.join(tmp_dir, "doc.json")
        write_json(path, {"currency": "₹", "rate": 6500.0})
        assert read_json(path) == {"currency": "₹", "rate": 6500.0}

    def test_keeps_unicode_readable(self, tmp_dir):
        path = os.path.join(tmp_dir, "doc.json")
        write_json(path, {"currency": "₹"})
        with open(path, encoding="utf-8") as f:
            content = f.read()
        assert "₹" in content
        assert content.endswith("\n")

    def test_write_with_backup(self, tmp_dir):
        path = os.path.join(tmp_dir, "doc.json")
        assert write_json(path, {"v": 1}, backup=True) is None
        backup = write_json(path, {"v": 2}, backup=True)
        assert read_json(backup) == {"v": 1}
        assert read_json(path) == {"v": 2}

    def test_read_missing(self, tmp_dir):
        with pytest.raises(FileIOError, match="Cannot read"):
            read_json(os.path.join(tmp_dir, "missing.json"))

    def test_read_invalid(self, tmp_dir):
        path = os.path.join(tmp_dir, "bad.json")
        safe_write(path, "[1, 2")
        with pytest.raises(FileIOError, match="Invalid JSON"):
            read_json(path)
