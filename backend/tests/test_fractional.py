import pytest

from bond_desk.errors import PriceFormatError, RecordFormatError
from bond_desk.pricing import from_fraction, to_fraction


class TestFromFraction:
    """Parsing 32nds notation"""

    @pytest.mark.parametrize("text,expected", [
        ("100-000", 100.0),
        ("99-16+", 99.515625),
        ("99-317", 99 + 31 / 32 + 7 / 256),
        ("100-002", 100.0078125),
        ("0-011", 1 / 32 + 1 / 256),
    ])
    def test_values(self, text, expected):
        assert from_fraction(text) == expected

    @pytest.mark.parametrize("text", [
        "99-320",   # 32nds out of range
        "99-16",
        "99.5",
        "-16+",
        "99-1a+",
        "",
    ])
    def test_rejects_malformed(self, text):
        with pytest.raises(PriceFormatError):
            from_fraction(text)

    def test_literal_four_reads_as_plus(self):
        assert from_fraction("99-164") == from_fraction("99-16+")
        assert to_fraction(from_fraction("99-164")) == "99-16+"

    def test_negative(self):
        assert from_fraction("-0-00+") == -4 / 256
        assert from_fraction("-1-160") == -1.5

    def test_format_error_is_a_record_error(self):
        with pytest.raises(RecordFormatError):
            from_fraction("abc")
        with pytest.raises(ValueError):
            from_fraction("abc")


class TestToFraction:
    """Rendering to 32nds notation"""

    def test_plus_for_half_32nd(self):
        assert to_fraction(99.515625) == "99-16+"

    def test_floors_to_256th(self):
        assert to_fraction(100.0 + 1 / 256 + 1 / 1024) == "100-001"

    def test_tolerates_float_noise(self):
        assert to_fraction((99.5 + 99.53125) / 2.0) == "99-16+"

    def test_round_trip_every_tick(self):
        for xy in range(32):
            for z in "0123+567":
                text = f"101-{xy:02d}{z}"
                assert to_fraction(from_fraction(text)) == text, f"Round trip failed for {text}"

    def test_parse_exact_to_256th(self):
        for ticks in range(0, 256 * 2):
            value = 99 + ticks / 256
            assert from_fraction(to_fraction(value)) == value

    def test_negative_values_carry_a_sign(self):
        assert to_fraction(-4 / 256) == "-0-00+"
        assert to_fraction(-1.5) == "-1-160"
        assert to_fraction(-1 / 1024) == "0-000", "Rounds toward zero, no negative zero"

    def test_negative_round_trip(self):
        for ticks in range(1, 256 * 2):
            value = -ticks / 256
            assert from_fraction(to_fraction(value)) == value
