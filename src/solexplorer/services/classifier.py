from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from solexplorer.config import settings
from solexplorer.core.dto import RawTransaction, TransactionEvent
from solexplorer.core.enums import TransactionStatus, TransferDirection
from solexplorer.core.models import TimelineTransaction


def find_transfer_event(tx: RawTransaction) -> Optional[TransactionEvent]:
    # events may be a program-event mapping or junk; only a sequence can match
    if not isinstance(tx.events, (list, tuple)):
        return None
    for ev in tx.events:
        if isinstance(ev, TransactionEvent) and ev.type == "transfer":
            return ev
    return None


def lamports_to_sol(raw: Any) -> Optional[Decimal]:
    """Lamports -> SOL. Missing, zero or unparsable amounts give None."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        lamports = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return None
    if not lamports.is_finite() or lamports == 0:
        return None
    return lamports / settings.LAMPORTS_PER_SOL


def classify_transaction(tx: RawTransaction, address: str) -> TimelineTransaction:
    """
    Normalize one raw transaction from the point of view of `address`.

    Counterparty resolution (best effort):
    - TRANSFER: first account of the transfer event that isn't `address`
    - SWAP: the program id
    - anything else: first accountData pubkey that isn't `address`
    """
    tx_type = tx.type or "UNKNOWN"
    source = ""
    sol_amount: Optional[Decimal] = None
    direction: Optional[TransferDirection] = None

    if tx_type == "TRANSFER":
        event = find_transfer_event(tx)
        if event is not None:
            accounts = event.accounts or ()
            source = next((a for a in accounts if a != address), "")

            data = event.data if isinstance(event.data, dict) else {}
            sol_amount = lamports_to_sol(data.get("amount"))
            if sol_amount is not None:
                if data.get("source") == address:
                    direction = TransferDirection.SENT
                else:
                    direction = TransferDirection.RECEIVED
    elif tx_type == "SWAP":
        source = tx.program_id or ""
    else:
        source = next((a.pubkey for a in (tx.account_data or ()) if a.pubkey != address), "")

    return TimelineTransaction(
        signature=tx.signature,
        timestamp=tx.timestamp,
        type=tx_type,
        description=tx.description or "",
        source=source,
        status=TransactionStatus.FAILED if tx.transaction_error else TransactionStatus.SUCCESS,
        sol_amount=sol_amount,
        direction=direction,
    )
