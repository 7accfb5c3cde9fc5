from __future__ import annotations

from typing import AbstractSet, Iterable, List

from solexplorer.config import settings
from solexplorer.core.dto import RawTransaction


def is_spam_transaction(
    tx: RawTransaction,
    spam_addresses: AbstractSet[str] = settings.SPAM_ADDRESSES,
) -> bool:
    if tx.fee_payer and tx.fee_payer in spam_addresses:
        return True
    for t in tx.native_transfers:
        if t.from_user_account in spam_addresses or t.to_user_account in spam_addresses:
            return True
    for t in tx.token_transfers:
        if t.from_user_account in spam_addresses or t.to_user_account in spam_addresses:
            return True
    return False


def drop_spam(
    txs: Iterable[RawTransaction],
    spam_addresses: AbstractSet[str] = settings.SPAM_ADDRESSES,
) -> List[RawTransaction]:
    return [t for t in txs if not is_spam_transaction(t, spam_addresses)]
