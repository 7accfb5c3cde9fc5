from __future__ import annotations

import argparse
import datetime as dt
import os
import sys
import time

from solexplorer.config import settings
from solexplorer.core.enums import InputKind
from solexplorer.core.models import TimelineConfig
from solexplorer.logging_setup import configure_logging
from solexplorer.services.timeline_service import TimelineService
from solexplorer.services.transaction_view import fetch_transaction_detail
from solexplorer.io.output_writer import (
    write_heatmap_json,
    write_report_json,
    write_summary_md,
    write_transaction_json,
)
from solexplorer.utils.solana import identify_input

from solexplorer.adapters.helius.helius_adapter import HeliusTransactionAdapter
from solexplorer.adapters.helius.static_adapter import StaticTransactionAdapter


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="solexplorer", description="Solana address activity timeline")
    p.add_argument("query", nargs="?", help="Address or transaction signature (routed by length)")
    p.add_argument("--address", required=False, help="Address to explore (skips input routing)")
    p.add_argument("--limit", type=int, default=settings.DEFAULT_TX_LIMIT, help="Max transactions to fetch")
    p.add_argument("--days", type=int, default=settings.HEATMAP_WINDOW_DAYS, help="Heatmap window in days")
    p.add_argument("--before", help="Only fetch transactions older than this signature")
    p.add_argument("--out", default="out", help="Output folder")
    p.add_argument("--use-static", action="store_true", help="Use static adapter (dev/testing)")
    p.add_argument("--static-file", help="JSON dump of parsed transactions for --use-static")
    p.add_argument("--log-level", help="Logging level (default: SOLEXPLORER_LOG_LEVEL or WARNING)")
    return p


def _make_progress_reporter(cfg: TimelineConfig):
    start_time = time.time()

    def _ts() -> str:
        return dt.datetime.now().strftime("%H:%M:%S")

    def progress(event: str, data: dict) -> None:
        if event == "start":
            print(f"[{_ts()}] Building timeline for {cfg.address} • limit {cfg.limit} • {cfg.window_days}d heatmap")
            return
        if event == "fetch_done":
            print(f"Fetched {data.get('count', 0)} transaction(s)")
            return
        if event == "done":
            elapsed = time.time() - start_time
            print(
                f"[{_ts()}] Done in {elapsed:.1f}s • "
                f"{data['transactions']} tx • {data['periods']} month(s) • "
                f"{data['active_days']} active day(s)"
            )
            return
        if event == "error":
            print(f"[{_ts()}] Error: {data.get('message', 'Unknown error')}", file=sys.stderr)

    return progress


def _run_transaction(source, signature: str, out_dir: str, progress) -> int:
    print(f"Fetching transaction {signature}")
    try:
        detail = fetch_transaction_detail(source, signature)
    except Exception as exc:
        progress("error", {"message": f"{exc.__class__.__name__}: {exc}"})
        return 1

    tx = detail.transaction
    print(f"{tx.type} • {tx.status.value} • fee {detail.fee_sol} SOL • {detail.program_label or 'unknown program'}")
    print(f"Wrote: {write_transaction_json(detail, out_dir)}")
    return 0


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.address:
        kind, value = InputKind.ADDRESS, args.address.strip()
    elif args.query:
        kind, value = identify_input(args.query)
        if kind == InputKind.INVALID:
            print(f"Not an address or transaction signature: {value!r}", file=sys.stderr)
            return 2
    else:
        print("Missing address or signature", file=sys.stderr)
        return 2
    if args.days < 1:
        print("--days must be >= 1", file=sys.stderr)
        return 2

    cfg = TimelineConfig(
        address=value,
        limit=args.limit,
        window_days=args.days,
        before=args.before,
    )
    progress = _make_progress_reporter(cfg)

    # Ports
    if args.use_static:
        if args.static_file:
            source = StaticTransactionAdapter.from_json_file(args.static_file)
        else:
            source = StaticTransactionAdapter()
        adapter_label = "StaticTransactionAdapter (dev/testing)"
    else:
        if not os.getenv("HELIUS_API_KEY"):
            progress("error", {"message": "Missing HELIUS_API_KEY environment variable"})
            return 2
        source = HeliusTransactionAdapter()
        adapter_label = "HeliusTransactionAdapter"

    print(f"Adapter: {adapter_label}")

    if kind == InputKind.TX:
        return _run_transaction(source, value, args.out, progress)

    svc = TimelineService(source=source)
    try:
        report = svc.build(cfg, on_progress=progress)
    except Exception as exc:
        progress("error", {"message": f"{exc.__class__.__name__}: {exc}"})
        return 1

    # Outputs
    print("Writing outputs...")
    report_path = write_report_json(report, args.out)
    heatmap_path = write_heatmap_json(report, args.out)
    summary_path = write_summary_md(report, args.out)

    print(f"Wrote: {report_path}")
    print(f"Wrote: {heatmap_path}")
    print(f"Wrote: {summary_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
