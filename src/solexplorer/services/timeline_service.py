from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Set

from solexplorer.core.dto import RawTransaction
from solexplorer.core.models import TimelineConfig, TimelineReport
from solexplorer.logging_setup import get_logger
from solexplorer.ports.transaction_data_port import TransactionDataPort
from solexplorer.services.activity_series import build_daily_series
from solexplorer.services.aggregator import aggregate_transactions
from solexplorer.services.funding import group_funding_sources

logger = get_logger(__name__)

ProgressFn = Callable[[str, Dict[str, Any]], None]


class TimelineService:
    """
    Builds the explorer view data for one address.

    - Data: parsed transactions from a TransactionDataPort (spam already dropped)
    - Output: month/day/counterparty timeline, dense heatmap series, funding sources
    - Ignores: balances, token holdings, live updates
    """

    def __init__(self, source: TransactionDataPort) -> None:
        self.source = source

    def build(self, cfg: TimelineConfig, on_progress: Optional[ProgressFn] = None) -> TimelineReport:
        progress = on_progress or (lambda event, data: None)
        progress("start", {"address": cfg.address})

        txs = self._dedupe(
            self.source.iter_address_transactions(cfg.address, cfg.limit, before=cfg.before)
        )
        progress("fetch_done", {"count": len(txs)})
        logger.info("Building timeline for %s from %d transaction(s)", cfg.address, len(txs))

        timeline = aggregate_transactions(txs, cfg.address)
        heatmap = build_daily_series(timeline, window_days=cfg.window_days, today=cfg.today)
        funding = group_funding_sources(txs, cfg.address)

        report = TimelineReport(
            address=cfg.address,
            transaction_count=len(txs),
            timeline=timeline,
            heatmap=heatmap,
            funding_sources=funding,
        )
        progress("done", {
            "transactions": len(txs),
            "periods": len(timeline.by_time_period),
            "active_days": sum(1 for v in heatmap if v.count),
        })
        return report

    # -------------------------
    # Helpers
    # -------------------------

    @staticmethod
    def _dedupe(txs) -> List[RawTransaction]:
        seen: Set[str] = set()
        out: List[RawTransaction] = []
        for t in txs:
            if t.signature in seen:
                continue
            seen.add(t.signature)
            out.append(t)
        return out
