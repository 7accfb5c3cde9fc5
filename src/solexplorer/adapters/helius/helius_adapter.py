from typing import AbstractSet, Any, Dict, Iterable, Optional
import time

import requests

from solexplorer.config import settings
from solexplorer.adapters.helius.rate_limiter import SimpleRateLimiter, backoff_delay
from solexplorer.adapters.helius.spam_filter import drop_spam
from solexplorer.core.errors import DataSourceError, RateLimitError
from solexplorer.core.dto import RawTransaction
from solexplorer.io.schemas import raw_transactions_from_json
from solexplorer.logging_setup import get_logger
from solexplorer.ports.transaction_data_port import TransactionDataPort

logger = get_logger(__name__)


class HeliusTransactionAdapter(TransactionDataPort):

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = settings.HELIUS_BASE_URL,
        requests_per_sec: float = settings.HELIUS_REQUESTS_PER_SEC,
        timeout_sec: int = settings.HELIUS_TIMEOUT_SEC,
        max_retries: int = settings.HELIUS_MAX_RETRIES,
        max_page_size: int = settings.HELIUS_MAX_PAGE_SIZE,
        spam_addresses: AbstractSet[str] = settings.SPAM_ADDRESSES,
        session: Optional[requests.Session] = None,
        sleep=time.sleep,
    ) -> None:
        self._api_key = api_key or settings.HELIUS_API_KEY
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_sec
        self._max_retries = max_retries
        self._max_page_size = max_page_size
        self._spam = spam_addresses
        self._sleep = sleep

        self._rl = SimpleRateLimiter(requests_per_sec, sleep=sleep)
        self._session = session or requests.Session()

    # ---------- internal ----------

    def _call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        req = dict(params or {})
        req["api-key"] = self._api_key
        url = f"{self._base_url}/{path.lstrip('/')}"

        last_err: Optional[Exception] = None

        for attempt in range(self._max_retries):
            try:
                self._rl.wait()
                resp = self._session.request(
                    method,
                    url,
                    params=req,
                    json=json_body,
                    timeout=self._timeout,
                )
                if resp.status_code == 429:
                    raise RateLimitError(f"Helius rate limited {method} {path}")
                resp.raise_for_status()
                return resp.json()

            except Exception as e:
                last_err = e
                logger.debug("Helius %s %s attempt %d failed: %s", method, path, attempt + 1, e)
                self._sleep(backoff_delay(attempt))

        raise DataSourceError(f"Helius failed after retries: {last_err}")

    # ---------- port methods ----------

    def iter_address_transactions(
        self,
        address: str,
        limit: int,
        before: Optional[str] = None,
    ) -> Iterable[RawTransaction]:

        if limit <= 0:
            return
        # over-fetch so a page still fills `limit` after spam is dropped
        page_size = min(limit * 2, self._max_page_size)
        yielded = 0
        cursor = before

        while True:
            params: Dict[str, Any] = {"limit": page_size}
            if cursor:
                params["before"] = cursor

            data = self._call("GET", f"addresses/{address}/transactions", params=params)
            if not isinstance(data, list) or not data:
                break

            page = raw_transactions_from_json(data)
            kept = drop_spam(page, self._spam)
            logger.info(
                "Fetched %d transaction(s) for %s, filtered %d spam",
                len(page), address, len(page) - len(kept),
            )

            for tx in kept:
                yield tx
                yielded += 1
                if yielded >= limit:
                    return

            if len(data) < page_size or not page:
                break
            cursor = page[-1].signature
            if not cursor:
                break

    def get_transaction(self, signature: str) -> RawTransaction:
        data = self._call("POST", "transactions", json_body={"transactions": [signature]})
        txs = raw_transactions_from_json(data)
        if not txs:
            raise DataSourceError(f"No transaction data found for {signature}")
        return txs[0]
