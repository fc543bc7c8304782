"""Tests for listing record and HEAD header normalization."""

from __future__ import annotations

from datetime import UTC, datetime

import httpx
import pytest

from bunny_storage.listing import file_info_from_headers, file_info_from_record, join_object_path

NOW = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


class TestFileInfoFromRecord:
    def test_long_form_record(self) -> None:
        record = {
            "Guid": "0b3b3c1e",
            "StorageZoneName": "my-zone",
            "Path": "/my-zone/buildings/123/",
            "ObjectName": "image.jpg",
            "Length": 2048,
            "LastChanged": "2024-05-01T10:20:30.123",
            "IsDirectory": False,
        }
        info = file_info_from_record(record, "buildings/123", now=NOW)
        assert info.name == "image.jpg"
        assert info.path == "buildings/123/image.jpg"
        assert info.size == 2048
        assert info.last_modified == datetime(2024, 5, 1, 10, 20, 30, 123000, tzinfo=UTC)
        assert info.is_directory is False

    def test_short_form_record(self) -> None:
        info = file_info_from_record({"Name": "a.txt", "Size": "17"}, "", now=NOW)
        assert info.name == "a.txt"
        assert info.path == "a.txt"
        assert info.size == 17

    def test_directory_entry(self) -> None:
        info = file_info_from_record({"ObjectName": "photos", "IsDirectory": True}, "/", now=NOW)
        assert info.is_directory is True
        assert info.path == "photos"

    def test_missing_size_and_timestamp_default(self) -> None:
        info = file_info_from_record({"ObjectName": "x.bin"}, now=NOW)
        assert info.size == 0
        assert info.last_modified == NOW

    def test_unparsable_values_default(self) -> None:
        info = file_info_from_record(
            {"ObjectName": "x.bin", "Length": "lots", "LastChanged": "yesterday"}, now=NOW
        )
        assert info.size == 0
        assert info.last_modified == NOW

    def test_negative_size_clamped(self) -> None:
        assert file_info_from_record({"Name": "x", "Length": -5}, now=NOW).size == 0

    @pytest.mark.parametrize("size", [float("inf"), float("-inf"), float("nan"), {"n": 1}, True])
    def test_non_finite_or_odd_size_defaults(self, size: object) -> None:
        assert file_info_from_record({"Name": "x", "Length": size}, now=NOW).size == 0

    def test_huge_integer_size_kept(self) -> None:
        assert file_info_from_record({"Name": "x", "Length": 10**20}, now=NOW).size == 10**20

    @pytest.mark.parametrize("flag", ["false", "true", 1, "yes"])
    def test_only_boolean_true_marks_directory(self, flag: object) -> None:
        assert file_info_from_record({"Name": "x", "IsDirectory": flag}).is_directory is False

    def test_out_of_range_iso_timestamp_defaults(self) -> None:
        info = file_info_from_record({"Name": "x", "LastChanged": "99999-01-01T00:00:00"}, now=NOW)
        assert info.last_modified == NOW

    def test_long_form_wins_over_short_form(self) -> None:
        info = file_info_from_record({"ObjectName": "long", "Name": "short", "Length": 1, "Size": 2})
        assert info.name == "long"
        assert info.size == 1

    def test_offset_timestamp_kept(self) -> None:
        info = file_info_from_record({"Name": "x", "LastChanged": "2024-05-01T10:00:00+02:00"})
        assert info.last_modified == datetime(2024, 5, 1, 8, 0, tzinfo=UTC)

    def test_default_timestamp_is_current(self) -> None:
        before = datetime.now(UTC)
        info = file_info_from_record({"Name": "x"})
        assert before <= info.last_modified <= datetime.now(UTC)


class TestFileInfoFromHeaders:
    def test_headers_mapped(self) -> None:
        headers = httpx.Headers(
            {"Content-Length": "1234", "Last-Modified": "Wed, 21 Oct 2015 07:28:00 GMT"}
        )
        info = file_info_from_headers(headers, "buildings/123/image.jpg", now=NOW)
        assert info.name == "image.jpg"
        assert info.path == "buildings/123/image.jpg"
        assert info.size == 1234
        assert info.last_modified == datetime(2015, 10, 21, 7, 28, tzinfo=UTC)
        assert info.is_directory is False

    def test_missing_headers_default(self) -> None:
        info = file_info_from_headers(httpx.Headers(), "file.txt", now=NOW)
        assert info.size == 0
        assert info.last_modified == NOW
        assert info.name == "file.txt"

    def test_bad_last_modified_defaults(self) -> None:
        info = file_info_from_headers(httpx.Headers({"last-modified": "not a date"}), "f", now=NOW)
        assert info.last_modified == NOW

    def test_out_of_range_last_modified_defaults(self) -> None:
        headers = httpx.Headers(
            {"last-modified": "Mon, 01 Jan 99999999999999999999 00:00:00 GMT"}
        )
        assert file_info_from_headers(headers, "a.jpg", now=NOW).last_modified == NOW

    def test_non_numeric_content_length_defaults(self) -> None:
        headers = httpx.Headers({"content-length": "unknown"})
        assert file_info_from_headers(headers, "a.jpg", now=NOW).size == 0


class TestJoinObjectPath:
    def test_join(self) -> None:
        assert join_object_path("a/b/", "c") == "a/b/c"
        assert join_object_path("", "c") == "c"
        assert join_object_path("/a", "c") == "a/c"
