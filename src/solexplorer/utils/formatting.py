from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from solexplorer.config import settings


def format_sol_amount(sol: Decimal) -> str:
    # trims trailing zeros but never uses exponent notation
    s = format(sol.normalize(), "f") if sol else "0"
    return f"{s} SOL"


def format_timestamp(unix_ts: int) -> str:
    try:
        return datetime.fromtimestamp(int(unix_ts), tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    except (OverflowError, OSError, ValueError, TypeError):
        return "invalid time"


def short_address(addr: str) -> str:
    if not addr:
        return ""
    if len(addr) <= 12:
        return addr
    return f"{addr[:4]}...{addr[-4:]}"


def token_symbol(mint: str) -> str:
    known = settings.TOKEN_MINTS.get(mint)
    return known[0] if known else short_address(mint)


def format_token_amount(mint: str, amount: Decimal) -> str:
    """
    Amount is in token units (the indexer already applied decimals).
    Known mints print at their full precision with the symbol.
    """
    known = settings.TOKEN_MINTS.get(mint)
    if known:
        symbol, decimals = known
        return f"{amount:.{decimals}f} {symbol}"
    s = format(amount.normalize(), "f") if amount else "0"
    return f"{s} [{short_address(mint)}]"
