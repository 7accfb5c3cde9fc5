import json
from typing import AbstractSet, List, Optional

from solexplorer.config import settings
from solexplorer.adapters.helius.spam_filter import drop_spam
from solexplorer.core.dto import RawTransaction
from solexplorer.core.errors import DataSourceError
from solexplorer.io.schemas import raw_transactions_from_json
from solexplorer.ports.transaction_data_port import TransactionDataPort

class StaticTransactionAdapter(TransactionDataPort):
    def __init__(self,
                 transactions: Optional[List[RawTransaction]] = None,
                 spam_addresses: AbstractSet[str] = settings.SPAM_ADDRESSES,
                 ):
        self._txs = drop_spam(transactions or [], spam_addresses)

    @classmethod
    def from_json_file(cls, path: str) -> "StaticTransactionAdapter":
        with open(path, encoding="utf-8") as f:
            return cls(raw_transactions_from_json(json.load(f)))

    def _involves(self, tx: RawTransaction, address: str) -> bool:
        if tx.fee_payer == address:
            return True
        if any(a.pubkey == address for a in tx.account_data):
            return True
        if isinstance(tx.events, tuple) and any(address in (e.accounts or ()) for e in tx.events):
            return True
        if any(address in (t.from_user_account, t.to_user_account) for t in tx.native_transfers):
            return True
        return any(address in (t.from_user_account, t.to_user_account) for t in tx.token_transfers)

    def iter_address_transactions(self, address, limit, before = None):
        # newest first, like the live API
        items = sorted(
            (t for t in self._txs if self._involves(t, address)),
            key=lambda x: (x.timestamp, x.slot),
            reverse=True,
        )
        if before:
            idx = next((i for i, t in enumerate(items) if t.signature == before), None)
            items = items[idx + 1:] if idx is not None else []
        return items[:max(limit, 0)]

    def get_transaction(self, signature):
        for t in self._txs:
            if t.signature == signature:
                return t
        raise DataSourceError(f"No transaction data found for {signature}")
