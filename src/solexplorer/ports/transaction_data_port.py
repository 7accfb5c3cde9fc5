from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from solexplorer.core.dto import RawTransaction

class TransactionDataPort(ABC):
    """
    Abstract Class for fetching parsed transactions for an address.
    """

    # --- address history, newest first, spam already dropped ---

    @abstractmethod
    def iter_address_transactions(
        self,
        address: str,
        limit: int,
        before: Optional[str] = None,
    ) -> Iterable[RawTransaction]:
        raise NotImplementedError

    # --- single transaction lookup ---

    @abstractmethod
    def get_transaction(self, signature: str) -> RawTransaction:
        raise NotImplementedError
