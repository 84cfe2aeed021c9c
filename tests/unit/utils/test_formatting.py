"""Unit tests for console formatting helpers."""

import pytest
from clir.utils.formatting import format_size


class TestFormatSize:
    """Tests for format_size function."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (None, "0B"),
            (0, "0B"),
            (1, "1B"),
            (512, "512B"),
            (999, "999B"),
            (1000, "1.00K"),
            (1024, "1.02K"),
            (4096, "4.10K"),
            (12_345, "12.3K"),
            (123_456, "123K"),
            (12_300_000, "12.3M"),
            (340_000_000_000, "340G"),
            (2_000_000_000_000, "2.00T"),
            (9_999, "10.0K"),
            (99_960, "100K"),
            (999_999, "1.00M"),
            (999_999_999, "1.00G"),
        ],
    )
    def test_decimal_units(self, size: int | None, expected: str) -> None:
        """Sizes use decimal units with precision shrinking as values grow."""
        assert format_size(size) == expected

    def test_negative_is_zero(self) -> None:
        """Negative sizes are shown as zero."""
        assert format_size(-5) == "0B"

    def test_huge_values_use_largest_unit(self) -> None:
        """Values beyond the largest unit stay in petabytes."""
        assert format_size(5 * 10**18) == "5000P"

    def test_rounding_never_shows_four_digits(self) -> None:
        """A value that rounds up to 1000 moves to the next unit."""
        assert format_size(999_999) == "1.00M"
        assert format_size(999_499) == "999K"
