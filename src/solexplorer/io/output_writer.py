from __future__ import annotations

import json
from pathlib import Path

from solexplorer.core.enums import ActivityLevel
from solexplorer.core.models import TimelineReport, TransactionDetail
from solexplorer.io.schemas import heatmap_to_list, report_to_dict, transaction_detail_to_dict
from solexplorer.utils.formatting import (
    format_sol_amount,
    format_timestamp,
    format_token_amount,
    short_address,
    token_symbol,
)


def write_report_json(report: TimelineReport, out_dir: str, filename: str = "timeline.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(report_to_dict(report), f, indent=2)

    return str(out_path)


def write_heatmap_json(report: TimelineReport, out_dir: str, filename: str = "heatmap.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(heatmap_to_list(report.heatmap), f, indent=2)

    return str(out_path)


def write_transaction_json(detail: TransactionDetail, out_dir: str, filename: str = "transaction.json") -> str:
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    with out_path.open("w", encoding="utf-8") as f:
        json.dump(transaction_detail_to_dict(detail), f, indent=2)

    return str(out_path)


def write_summary_md(
    report: TimelineReport,
    out_dir: str,
    filename: str = "summary.md",
    max_periods: int = 3,
    max_funding: int = 10,
) -> str:
    """
    Human-readable activity summary, most recent months first.
    """
    p = Path(out_dir)
    p.mkdir(parents=True, exist_ok=True)

    out_path = p / filename
    timeline = report.timeline

    active = [v for v in report.heatmap if v.count]
    level_counts = {}
    for v in active:
        level_counts[v.level.value] = level_counts.get(v.level.value, 0) + 1
    busiest = max(active, key=lambda v: (v.count, v.date)) if active else None

    lines = []
    lines.append("# Address Timeline\n")
    lines.append(f"- Address: **{report.address}**\n")
    lines.append(f"- Transactions: **{report.transaction_count}**\n")
    lines.append(f"- Months with activity: **{len(timeline.by_time_period)}**\n")
    lines.append(f"- Active days in heatmap window: **{len(active)} / {len(report.heatmap)}**\n")
    if busiest is not None:
        lines.append(f"- Busiest day: **{busiest.date}** ({busiest.count} tx)\n")
    lines.append("\n")

    lines.append("## Activity Levels\n\n")
    if not active:
        lines.append("_No activity inside the heatmap window._\n\n")
    else:
        for lvl in (ActivityLevel.HIGH, ActivityLevel.MEDIUM, ActivityLevel.LOW):
            lines.append(f"- **{lvl.value}**: {level_counts.get(lvl.value, 0)} day(s)\n")
        lines.append("\n")

    lines.append("## Recent Months\n\n")
    if not timeline.by_time_period:
        lines.append("_No transactions found._\n\n")
    for pkey in sorted(timeline.by_time_period, reverse=True)[:max_periods]:
        period = timeline.by_time_period[pkey]
        lines.append(
            f"### {period.label} | {period.total_transactions} tx "
            f"| {format_sol_amount(period.total_value)}\n\n"
        )
        for dkey in sorted(period.days, reverse=True):
            day = period.days[dkey]
            lines.append(
                f"- **{day.day_of_week} {day.label}** | {day.total_transactions} tx "
                f"| {day.activity_level.value}\n"
            )
            for addr in sorted(day.by_sources, reverse=True):
                src = day.by_sources[addr]
                flow = ""
                if src.sol_sent or src.sol_received:
                    flow = (
                        f" | sent {format_sol_amount(src.sol_sent)}"
                        f" | received {format_sol_amount(src.sol_received)}"
                    )
                lines.append(
                    f"  - {short_address(addr) or '(unknown)'}: {src.total_transactions} tx{flow}\n"
                )
        lines.append("\n")

    lines.append("## Top Funding Sources\n\n")
    if not report.funding_sources:
        lines.append("_No direct inbound transfers found._\n")
    else:
        for src in report.funding_sources[:max_funding]:
            lines.append(
                f"- **{format_sol_amount(src.total_sol)}** | {src.address} "
                f"| last: {format_timestamp(src.last_timestamp)}\n"
            )
            for mint in sorted(src.token_transfers, key=token_symbol):
                lines.append(f"  - {format_token_amount(mint, src.token_transfers[mint])}\n")

    with out_path.open("w", encoding="utf-8") as f:
        f.writelines(lines)

    return str(out_path)
