from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from gatewarden.backup import parse_timestamp, read_timestamp, write_timestamp

NEW_YEAR_2026 = 1767225600.0


class TestParseTimestamp:
    @pytest.mark.parametrize(
        "value",
        ["2026-01-01T00:00:00Z", "2026-01-01T09:00:00+09:00", "1767225600", " 1767225600.0\n"],
    )
    def test_iso_and_epoch_forms_agree(self, value: str) -> None:
        assert parse_timestamp(value) == NEW_YEAR_2026

    def test_date_only_is_midnight_utc(self) -> None:
        assert parse_timestamp("2026-01-01") == NEW_YEAR_2026

    @pytest.mark.parametrize("value", [None, "", "   ", "garbage", "nan", "inf"])
    def test_unreadable_values_are_epoch_zero(self, value: str | None) -> None:
        assert parse_timestamp(value) == 0.0

    def test_ordering_follows_time(self) -> None:
        older = parse_timestamp("2026-01-01T00:00:00Z")
        newer = parse_timestamp("2026-01-01T00:00:01Z")

        assert newer > older


class TestTimestampFiles:
    def test_missing_file_reads_as_none(self, fs: FakeFilesystem) -> None:
        assert read_timestamp(Path("/data/.last-sync")) is None

    def test_write_then_read(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/data")
        path = Path("/data/.last-sync")

        write_timestamp(path, "2026-01-01T00:00:00Z")

        assert path.read_text() == "2026-01-01T00:00:00Z\n"
        assert read_timestamp(path) == "2026-01-01T00:00:00Z"

    def test_write_leaves_no_temp_files(self, fs: FakeFilesystem) -> None:
        fs.create_dir("/data")

        write_timestamp(Path("/data/.last-sync"), "1")
        write_timestamp(Path("/data/.last-sync"), "2")

        assert sorted(p.name for p in Path("/data").iterdir()) == [".last-sync"]

    def test_undecodable_file_reads_as_epoch_zero(self, fs: FakeFilesystem) -> None:
        path = Path("/data/.last-sync")
        fs.create_file(path, contents=b"\xff\xfe\x00garbage")

        value = read_timestamp(path)

        assert value is not None
        assert parse_timestamp(value) == 0.0
