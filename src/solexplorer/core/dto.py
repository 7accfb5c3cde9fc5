from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class TransactionEvent:
    type: str
    accounts: Optional[Tuple[str, ...]] = None
    data: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class AccountData:
    pubkey: str
    native_balance_change: int = 0      # lamports


@dataclass(frozen=True)
class NativeTransfer:
    from_user_account: str
    to_user_account: str
    amount: int                         # lamports (raw)


@dataclass(frozen=True)
class TokenTransfer:
    from_user_account: str
    to_user_account: str
    mint: str
    token_amount: Decimal               # already decimal-adjusted by the indexer


@dataclass(frozen=True)
class RawTransaction:
    """
    One parsed transaction as returned by the indexing API.

    Only `signature` and `timestamp` are guaranteed. `events` is a tuple of
    TransactionEvent when the API sent a list, the raw mapping when it sent
    program events keyed by kind, or None.
    """

    signature: str
    timestamp: int                      # unix seconds
    slot: int = 0
    type: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None        # indexer's program label (RAYDIUM, SYSTEM_PROGRAM, ...)
    program_id: Optional[str] = None
    transaction_error: Any = None
    events: Any = None
    account_data: Tuple[AccountData, ...] = ()
    instructions: Tuple[Any, ...] = ()
    native_transfers: Tuple[NativeTransfer, ...] = ()
    token_transfers: Tuple[TokenTransfer, ...] = ()
    fee: int = 0
    fee_payer: Optional[str] = None
