"""Tests for USDC unit conversion."""

from decimal import Decimal

import pytest

from hivemind.units import USDC_DECIMALS, to_decimal, to_smallest_unit


class TestToSmallestUnit:
    def test_whole_amount(self):
        assert to_smallest_unit(50) == 50_000_000

    def test_fractional_string(self):
        assert to_smallest_unit("12.5") == 12_500_000

    def test_six_decimal_places(self):
        assert to_smallest_unit("0.000001") == 1

    def test_float_goes_through_str(self):
        assert to_smallest_unit(0.1) == 100_000

    def test_decimal_input(self):
        assert to_smallest_unit(Decimal("1.234567")) == 1_234_567

    def test_trailing_zeros_beyond_precision_are_fine(self):
        assert to_smallest_unit("1.50000000") == 1_500_000

    def test_zero(self):
        assert to_smallest_unit(0) == 0

    def test_large_amount_is_exact(self):
        assert to_smallest_unit("123456789012345678901234567890") == 123456789012345678901234567890 * 10**6

    def test_too_many_decimals_rejected(self):
        with pytest.raises(ValueError, match="fractional digits"):
            to_smallest_unit("0.0000001")

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            to_smallest_unit(-1)

    @pytest.mark.parametrize("bad", ["abc", "", "NaN", "Infinity", True])
    def test_garbage_rejected(self, bad):
        with pytest.raises(ValueError):
            to_smallest_unit(bad)


class TestToDecimal:
    def test_converts_base_units(self):
        assert to_decimal(12_500_000) == Decimal("12.5")

    def test_single_unit(self):
        assert to_decimal(1) == Decimal("0.000001")

    def test_huge_value_not_rounded(self):
        units = 2**256 - 1
        sign, digits, exponent = to_decimal(units).as_tuple()
        assert exponent == -USDC_DECIMALS
        assert int("".join(map(str, digits))) == units

    @pytest.mark.parametrize("x", ["0", "1", "0.5", "999999.999999", "42.000001"])
    def test_inverse_of_to_smallest_unit(self, x):
        assert to_decimal(to_smallest_unit(x)) == Decimal(x)
