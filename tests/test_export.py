"""Unit tests for the package list exporter."""

from datetime import datetime, timedelta, timezone

import pytest

from nuget_feed_tools.exceptions import ExportError
from nuget_feed_tools.export import (
    CsvListExporter,
    TextListExporter,
    build_base_name,
    export,
)
from nuget_feed_tools.models import PackageDescriptor

BASE_NAME = "packages-list-at-2024-01-01T00-00-00Z"


class TestExport:
    """Test file contents and locations."""

    def test_text_and_csv_contents(self, tmp_path, sample_packages):
        paths = export(sample_packages, str(tmp_path), BASE_NAME)

        assert paths.text_path == str(tmp_path / f"{BASE_NAME}.txt")
        assert paths.csv_path == str(tmp_path / f"{BASE_NAME}.csv")
        assert (tmp_path / f"{BASE_NAME}.txt").read_bytes() == b"A 1.0.0\r\nB 2.0.0"
        assert (tmp_path / f"{BASE_NAME}.csv").read_bytes() == b"A 1.0.0,B 2.0.0"

    def test_single_entry_has_no_delimiter(self, tmp_path):
        export([PackageDescriptor("Only", "1.0.0")], str(tmp_path), BASE_NAME)
        assert (tmp_path / f"{BASE_NAME}.txt").read_bytes() == b"Only 1.0.0"
        assert (tmp_path / f"{BASE_NAME}.csv").read_bytes() == b"Only 1.0.0"

    def test_repeated_export_overwrites(self, tmp_path, sample_packages):
        export(sample_packages, str(tmp_path), BASE_NAME)
        export(sample_packages, str(tmp_path), BASE_NAME)

        assert (tmp_path / f"{BASE_NAME}.txt").read_bytes() == b"A 1.0.0\r\nB 2.0.0"
        assert (tmp_path / f"{BASE_NAME}.csv").read_bytes() == b"A 1.0.0,B 2.0.0"

    def test_overwrites_longer_existing_file(self, tmp_path, sample_packages):
        (tmp_path / f"{BASE_NAME}.txt").write_text("x" * 500)
        export(sample_packages, str(tmp_path), BASE_NAME)
        assert (tmp_path / f"{BASE_NAME}.txt").read_bytes() == b"A 1.0.0\r\nB 2.0.0"

    def test_output_dir_created(self, tmp_path, sample_packages):
        output_dir = tmp_path / "nested" / "out"
        export(sample_packages, str(output_dir), BASE_NAME)
        assert (output_dir / f"{BASE_NAME}.csv").exists()

    def test_output_dir_is_a_file(self, tmp_path, sample_packages):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(ExportError):
            export(sample_packages, str(blocker), BASE_NAME)

    def test_exporter_extensions(self):
        assert TextListExporter().file_extension == "txt"
        assert CsvListExporter().file_extension == "csv"


class TestBuildBaseName:
    """Test export file naming."""

    def test_unfiltered_name(self):
        now = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert build_base_name("", now) == "packages-list-at-2024-01-01T00-00-00Z"

    def test_filtered_name(self):
        now = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert build_base_name("Foo.Bar", now) == "packages-list-for-Foo.Bar-at-2024-01-01T00-00-00Z"

    def test_fields_zero_padded(self):
        now = datetime(2024, 3, 5, 7, 8, 9, tzinfo=timezone.utc)
        assert build_base_name("", now).endswith("-at-2024-03-05T07-08-09Z")

    def test_converted_to_utc(self):
        now = datetime(2024, 6, 1, 2, 30, 0, tzinfo=timezone(timedelta(hours=3)))
        assert build_base_name("", now) == "packages-list-at-2024-05-31T23-30-00Z"

    def test_defaults_to_current_time(self):
        name = build_base_name()
        assert name.startswith("packages-list-at-")
        assert name.endswith("Z")
