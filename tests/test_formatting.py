from decimal import Decimal, localcontext
import pytest

from erc20.formatting import format_amount


class TestFormatAmount:
    """
    Unit tests for fixed-point rendering of on-chain amounts.
    """

    @pytest.mark.parametrize(
        ("amount", "decimals", "expected"),
        [
            (123456789, 0, "123456789"),
            (0, 0, "0"),
            (0, 18, "0.0"),
            (0, 1, "0.0"),
            (72094368689712, 18, "0.000072094368689712"),
            (123, 18, "0.000000000000000123"),
            (1142400000000001, 18, "0.001142400000000001"),
            (10**18, 18, "1.0"),
            (600000 * 10**18, 18, "600000.0"),
            (1020095885777777767, 18, "1.020095885777777767"),
            (1500000, 6, "1.500000"),
            (5, 1, "0.5"),
        ],
    )
    def test_known_values(self, amount, decimals, expected):
        assert format_amount(amount, decimals) == expected

    @pytest.mark.parametrize("decimals", [1, 6, 8, 18, 36])
    def test_zero_collapses(self, decimals):
        assert format_amount(0, decimals) == "0.0"

    @pytest.mark.parametrize(
        ("amount", "decimals"),
        [
            (2**256 - 1, 18),
            (10**30 + 7, 18),
            (987654321, 3),
            (1, 77),
            (31337 * 10**12, 12),
        ],
    )
    def test_rescaling_recovers_amount(self, amount, decimals):
        """
        Parsing the output and rescaling by 10**decimals gives back the input.
        """
        rendered = format_amount(amount, decimals)
        with localcontext() as ctx:
            ctx.prec = 200
            assert Decimal(rendered).scaleb(decimals) == amount

    def test_fractional_trailing_zeros_kept(self):
        assert format_amount(1_100_000_000_000_000_000, 18) == "1.100000000000000000"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            format_amount(-1, 18)
