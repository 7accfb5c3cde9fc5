from __future__ import annotations

from decimal import Decimal
from typing import Dict, Optional

from solexplorer.config import settings
from solexplorer.core.dto import RawTransaction
from solexplorer.core.models import TransactionDetail
from solexplorer.ports.transaction_data_port import TransactionDataPort
from solexplorer.services.classifier import classify_transaction


def build_transaction_detail(tx: RawTransaction, address: Optional[str] = None) -> TransactionDetail:
    # without an explicit viewpoint, read the transaction as its fee payer
    viewpoint = address if address is not None else (tx.fee_payer or "")

    changes: Dict[str, Decimal] = {}
    for a in tx.account_data:
        if a.native_balance_change:
            changes[a.pubkey] = changes.get(a.pubkey, Decimal("0")) + (
                Decimal(a.native_balance_change) / settings.LAMPORTS_PER_SOL
            )

    return TransactionDetail(
        transaction=classify_transaction(tx, viewpoint),
        slot=tx.slot,
        program_label=tx.source or "",
        fee_sol=Decimal(tx.fee) / settings.LAMPORTS_PER_SOL,
        fee_payer=tx.fee_payer or "",
        balance_changes=changes,
    )


def fetch_transaction_detail(
    source: TransactionDataPort,
    signature: str,
    address: Optional[str] = None,
) -> TransactionDetail:
    return build_transaction_detail(source.get_transaction(signature), address)
