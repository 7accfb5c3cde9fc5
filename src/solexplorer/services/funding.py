from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List

from solexplorer.config import settings
from solexplorer.core.dto import RawTransaction
from solexplorer.core.enums import FundingKind
from solexplorer.core.models import FundingSource, FundingTransfer

PROGRAM_TX_TYPES = {"SWAP", "STAKE", "NFT_SALE", "BURN", "INITIALIZE"}
TOKEN_TX_TYPES = {"TRANSFER", "TOKEN_TRANSFER"}


def is_program_interaction(tx: RawTransaction) -> bool:
    if len(tx.instructions or ()) > 1:
        return True
    if tx.type in PROGRAM_TX_TYPES:
        return True
    # any events at all means a program emitted something
    return bool(tx.events)


def group_funding_sources(
    transactions: Iterable[RawTransaction],
    address: str,
    dust_lamports: int = settings.FUNDING_DUST_LAMPORTS,
) -> List[FundingSource]:
    """
    Group direct inbound SOL / token transfers to `address` by sender.

    Program interactions are skipped entirely. Result is ordered by the
    sender's most recent funding transfer, newest first.
    """
    groups: Dict[str, FundingSource] = {}

    def _group(sender: str) -> FundingSource:
        g = groups.get(sender)
        if g is None:
            g = FundingSource(address=sender)
            groups[sender] = g
        return g

    for tx in transactions:
        if is_program_interaction(tx):
            continue

        for nt in tx.native_transfers:
            if nt.to_user_account != address or nt.amount <= dust_lamports:
                continue
            g = _group(nt.from_user_account)
            sol = Decimal(nt.amount) / settings.LAMPORTS_PER_SOL
            g.total_sol += sol
            g.transactions.append(
                FundingTransfer(
                    signature=tx.signature,
                    timestamp=tx.timestamp,
                    kind=FundingKind.SOL,
                    amount=sol,
                )
            )
            g.last_timestamp = max(g.last_timestamp, tx.timestamp)

        if tx.type not in TOKEN_TX_TYPES:
            continue

        for tt in tx.token_transfers:
            if tt.to_user_account != address:
                continue
            g = _group(tt.from_user_account)
            g.token_transfers[tt.mint] = g.token_transfers.get(tt.mint, Decimal("0")) + tt.token_amount
            g.transactions.append(
                FundingTransfer(
                    signature=tx.signature,
                    timestamp=tx.timestamp,
                    kind=FundingKind.TOKEN,
                    amount=tt.token_amount,
                    mint=tt.mint,
                )
            )
            g.last_timestamp = max(g.last_timestamp, tx.timestamp)

    return sorted(groups.values(), key=lambda g: g.last_timestamp, reverse=True)
