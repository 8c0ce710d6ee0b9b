"""Unit tests for tag argument parsing."""

import pytest

from table_progress_tracking.tables.arguments import TagArguments, parse_int_prefix
from table_progress_tracking.tables.errors import MissingTableIdError, ProcessingErrorReason


class TestParseIntPrefix:
    """Tests for parse_int_prefix."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("3", 3),
            ("  12", 12),
            ("2abc", 2),
            ("-1", -1),
            ("+4", 4),
            ("abc", 0),
            ("", 0),
        ],
    )
    def test_parse(self, value: str, expected: int) -> None:
        """Test leading integer extraction."""
        assert parse_int_prefix(value) == expected


class TestTagArguments:
    """Tests for TagArguments.from_attributes."""

    def test_table_id_only(self) -> None:
        """Test defaults when only table-id is given."""
        args = TagArguments.from_attributes({"table-id": "reading-list"})
        assert args.table_id == "reading-list"
        assert args.unique_column_index is None
        assert args.header_label is None

    def test_unique_column_index_is_converted_to_zero_based(self) -> None:
        """Test the 1-based author value is stored 0-based."""
        args = TagArguments.from_attributes({"table-id": "t", "unique-column-index": "1"})
        assert args.unique_column_index == 0

    def test_non_numeric_column_index_becomes_negative(self) -> None:
        """Test a non-numeric value counts as 0, i.e. index -1."""
        args = TagArguments.from_attributes({"table-id": "t", "unique-column-index": "first"})
        assert args.unique_column_index == -1

    def test_header_label(self) -> None:
        """Test header-label is kept verbatim."""
        args = TagArguments.from_attributes({"table-id": "t", "header-label": "Done?"})
        assert args.header_label == "Done?"

    def test_empty_header_label_is_none(self) -> None:
        """Test an empty header-label falls back to the icon."""
        args = TagArguments.from_attributes({"table-id": "t", "header-label": ""})
        assert args.header_label is None

    def test_attribute_names_are_case_insensitive(self) -> None:
        """Test attribute names are matched case-insensitively."""
        args = TagArguments.from_attributes({"Table-ID": "t", "UNIQUE-COLUMN-INDEX": "2"})
        assert args.table_id == "t"
        assert args.unique_column_index == 1

    @pytest.mark.parametrize("attributes", [{}, {"table-id": ""}, {"table-id": "   "}])
    def test_missing_table_id(self, attributes: dict[str, str]) -> None:
        """Test absent or blank table-id is rejected."""
        with pytest.raises(MissingTableIdError) as exc_info:
            TagArguments.from_attributes(attributes)
        assert exc_info.value.reason == ProcessingErrorReason.MISSING_TABLE_ID
