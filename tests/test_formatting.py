import unittest
from decimal import Decimal

from solexplorer.utils.formatting import (
    format_sol_amount,
    format_timestamp,
    format_token_amount,
    short_address,
    token_symbol,
)

USDC = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
UNKNOWN_MINT = "abcdQ7ZxkP3nV8s2LmTq9RuW4yHcJe6FgNbKwxyz"


class FormattingTests(unittest.TestCase):
    def test_sol_amount_trims_zeros_without_exponent(self) -> None:
        self.assertEqual(format_sol_amount(Decimal("1.500000000")), "1.5 SOL")
        self.assertEqual(format_sol_amount(Decimal("100")), "100 SOL")
        self.assertEqual(format_sol_amount(Decimal("0")), "0 SOL")

    def test_timestamp_is_utc(self) -> None:
        self.assertEqual(format_timestamp(1704844800), "2024-01-10 00:00:00 UTC")
        self.assertEqual(format_timestamp(10 ** 20), "invalid time")

    def test_short_address(self) -> None:
        self.assertEqual(short_address(USDC), "EPjF...Dt1v")
        self.assertEqual(short_address("short"), "short")
        self.assertEqual(short_address(""), "")


class TokenFormattingTests(unittest.TestCase):
    def test_known_mint_symbol(self) -> None:
        self.assertEqual(token_symbol(USDC), "USDC")
        self.assertEqual(token_symbol(BONK), "BONK")

    def test_unknown_mint_falls_back_to_short_mint(self) -> None:
        self.assertEqual(token_symbol(UNKNOWN_MINT), "abcd...wxyz")

    def test_known_mint_amount_uses_token_decimals(self) -> None:
        self.assertEqual(format_token_amount(USDC, Decimal("12.5")), "12.500000 USDC")
        self.assertEqual(format_token_amount(BONK, Decimal("1000")), "1000.00000 BONK")

    def test_unknown_mint_amount_shows_short_mint(self) -> None:
        self.assertEqual(format_token_amount(UNKNOWN_MINT, Decimal("3.000")), "3 [abcd...wxyz]")
        self.assertEqual(format_token_amount(UNKNOWN_MINT, Decimal("0")), "0 [abcd...wxyz]")


if __name__ == "__main__":
    unittest.main()
