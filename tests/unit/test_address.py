"""Unit tests for textual task addresses."""

import pytest

from tasktree.tasks.address import format_address, parse_address


class TestParseAddress:
    """Tests for parse_address."""

    @pytest.mark.parametrize("text", ["", ".", "root", "ROOT", "  .  "])
    def test_root_aliases(self, text):
        """Test root aliases parse to the empty address."""
        assert parse_address(text) == []

    def test_dotted(self):
        """Test dotted indices."""
        assert parse_address("0") == [0]
        assert parse_address("0.2.10") == [0, 2, 10]

    @pytest.mark.parametrize("text", ["a", "0..1", "1.-2", "-1", "0.x", "1."])
    def test_invalid(self, text):
        """Test malformed addresses raise ValueError."""
        with pytest.raises(ValueError):
            parse_address(text)


class TestFormatAddress:
    """Tests for format_address."""

    def test_root(self):
        """Test the empty address formats as '.'."""
        assert format_address([]) == "."

    def test_dotted(self):
        """Test indices are joined with dots."""
        assert format_address([0, 2, 1]) == "0.2.1"
        assert parse_address(format_address([3, 4])) == [3, 4]
