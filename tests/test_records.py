from __future__ import annotations

from datetime import datetime

import pytest

from hot_archiver.records import (
    ArchiveResult,
    HotEntry,
    MalformedTimestampError,
    format_timestamp,
    parse_timestamp,
)


def test_timestamp_roundtrip() -> None:
    value = datetime(2024, 1, 2, 3, 4, 5)
    assert format_timestamp(value) == "2024-01-02-03-04-05"
    assert parse_timestamp("2024-01-02-03-04-05") == value


@pytest.mark.parametrize(
    "text",
    [
        "2024-1-2-3-4-5",
        "2024-01-02 03:04:05",
        "2024-13-01-00-00-00",
        "2024-02-30-00-00-00",
        "",
        "latest",
    ],
)
def test_parse_timestamp_rejects_malformed(text: str) -> None:
    with pytest.raises(MalformedTimestampError):
        parse_timestamp(text)


def test_malformed_timestamp_is_value_error() -> None:
    assert issubclass(MalformedTimestampError, ValueError)


def test_entry_date_uses_fixed_format() -> None:
    entry = HotEntry(title="A", summary="", observed_at=datetime(2024, 1, 1, 0, 0, 0))
    assert entry.date == "2024-01-01-00-00-00"


def test_archive_result_counts_must_add_up() -> None:
    result = ArchiveResult(source="x.hot.txt", total_count=3, accepted_count=2, duplicate_count=1)
    assert result.as_dict() == {"source": "x.hot.txt", "accepted": 2, "duplicate": 1, "total": 3}
    with pytest.raises(ValueError):
        ArchiveResult(source="x.hot.txt", total_count=3, accepted_count=1, duplicate_count=1)
