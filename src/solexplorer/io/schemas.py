from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from solexplorer.core.dto import (
    AccountData,
    NativeTransfer,
    RawTransaction,
    TokenTransfer,
    TransactionEvent,
)
from solexplorer.core.models import (
    FundingSource,
    HeatmapValue,
    TimelineData,
    TimelineReport,
    TimelineTransaction,
    TransactionDetail,
)


def _dec_to_str(x: Decimal) -> str:
    # keep as string for JSON precision safety
    return format(x, "f")


def _int(val: Any, default: int = 0) -> int:
    if isinstance(val, bool):
        return default
    try:
        return int(val)
    except (TypeError, ValueError, OverflowError):
        return default


def _dec(val: Any) -> Decimal:
    if val is None:
        return Decimal("0")
    try:
        return Decimal(str(val))
    except (InvalidOperation, ValueError):
        return Decimal("0")


def _opt_str(val: Any) -> Optional[str]:
    return val if isinstance(val, str) else None


# -------------------------
# API JSON -> raw records
# -------------------------

def _event_from_dict(e: Dict[str, Any]) -> TransactionEvent:
    accounts = e.get("accounts")
    data = e.get("data")
    return TransactionEvent(
        type=str(e.get("type") or ""),
        accounts=tuple(a for a in accounts if isinstance(a, str)) if isinstance(accounts, list) else None,
        data=data if isinstance(data, dict) else None,
    )


def _events(raw: Any) -> Any:
    if isinstance(raw, list):
        return tuple(_event_from_dict(e) for e in raw if isinstance(e, dict))
    if isinstance(raw, dict):
        # program events keyed by kind ({"nft": ..., "swap": ...}); opaque here
        return raw
    return None


def raw_transaction_from_dict(d: Dict[str, Any]) -> RawTransaction:
    account_data = [
        AccountData(pubkey=a["pubkey"], native_balance_change=_int(a.get("nativeBalanceChange")))
        for a in (d.get("accountData") or [])
        if isinstance(a, dict) and isinstance(a.get("pubkey"), str)
    ]
    native = [
        NativeTransfer(
            from_user_account=str(t.get("fromUserAccount") or ""),
            to_user_account=str(t.get("toUserAccount") or ""),
            amount=_int(t.get("amount")),
        )
        for t in (d.get("nativeTransfers") or [])
        if isinstance(t, dict)
    ]
    tokens = [
        TokenTransfer(
            from_user_account=str(t.get("fromUserAccount") or ""),
            to_user_account=str(t.get("toUserAccount") or ""),
            mint=str(t.get("mint") or ""),
            token_amount=_dec(t.get("tokenAmount")),
        )
        for t in (d.get("tokenTransfers") or [])
        if isinstance(t, dict)
    ]
    instructions = d.get("instructions")

    return RawTransaction(
        signature=str(d.get("signature") or ""),
        timestamp=_int(d.get("timestamp")),
        slot=_int(d.get("slot")),
        type=_opt_str(d.get("type")),
        description=_opt_str(d.get("description")),
        source=_opt_str(d.get("source")),
        program_id=_opt_str(d.get("programId")),
        transaction_error=d.get("transactionError"),
        events=_events(d.get("events")),
        account_data=tuple(account_data),
        instructions=tuple(instructions) if isinstance(instructions, list) else (),
        native_transfers=tuple(native),
        token_transfers=tuple(tokens),
        fee=_int(d.get("fee")),
        fee_payer=_opt_str(d.get("feePayer")),
    )


def raw_transactions_from_json(payload: Any) -> List[RawTransaction]:
    if isinstance(payload, dict):
        payload = payload.get("transactions")
    if not isinstance(payload, list):
        return []
    return [raw_transaction_from_dict(d) for d in payload if isinstance(d, dict)]


# -------------------------
# Models -> JSON-safe dicts
# -------------------------

def _tx_to_dict(tx: TimelineTransaction) -> Dict[str, Any]:
    return {
        "signature": tx.signature,
        "timestamp": tx.timestamp,
        "type": tx.type,
        "description": tx.description,
        "source": tx.source,
        "status": tx.status.value,
        "sol_amount": _dec_to_str(tx.sol_amount) if tx.sol_amount is not None else None,
        "direction": tx.direction.value if tx.direction is not None else None,
    }


def timeline_to_dict(t: TimelineData) -> Dict[str, Any]:
    # most recent first; sources by address descending
    periods = {}
    for pkey in sorted(t.by_time_period, reverse=True):
        p = t.by_time_period[pkey]
        days = {}
        for dkey in sorted(p.days, reverse=True):
            d = p.days[dkey]
            days[dkey] = {
                "label": d.label,
                "date": d.date.isoformat(),
                "day_of_week": d.day_of_week,
                "total_transactions": d.total_transactions,
                "total_value": _dec_to_str(d.total_value),
                "activity_level": d.activity_level.value,
                "by_sources": {
                    addr: {
                        "address": s.address,
                        "total_transactions": s.total_transactions,
                        "sol_sent": _dec_to_str(s.sol_sent),
                        "sol_received": _dec_to_str(s.sol_received),
                        "transactions": [_tx_to_dict(tx) for tx in s.transactions],
                    }
                    for addr, s in sorted(d.by_sources.items(), reverse=True)
                },
            }
        periods[pkey] = {
            "label": p.label,
            "total_transactions": p.total_transactions,
            "total_value": _dec_to_str(p.total_value),
            "days": days,
        }
    return {"by_time_period": periods}


def heatmap_to_list(values: List[HeatmapValue]) -> List[Dict[str, Any]]:
    return [{"date": v.date, "count": v.count, "level": v.level.value} for v in values]


def funding_sources_to_list(sources: List[FundingSource]) -> List[Dict[str, Any]]:
    return [
        {
            "address": s.address,
            "total_sol": _dec_to_str(s.total_sol),
            "token_transfers": {mint: _dec_to_str(amt) for mint, amt in s.token_transfers.items()},
            "last_timestamp": s.last_timestamp,
            "transactions": [
                {
                    "signature": f.signature,
                    "timestamp": f.timestamp,
                    "kind": f.kind.value,
                    "amount": _dec_to_str(f.amount),
                    "mint": f.mint,
                }
                for f in s.transactions
            ],
        }
        for s in sources
    ]


def report_to_dict(r: TimelineReport) -> Dict[str, Any]:
    return {
        "address": r.address,
        "transaction_count": r.transaction_count,
        "timeline": timeline_to_dict(r.timeline),
        "heatmap": heatmap_to_list(r.heatmap),
        "funding_sources": funding_sources_to_list(r.funding_sources),
    }


def transaction_detail_to_dict(d: TransactionDetail) -> Dict[str, Any]:
    return {
        "transaction": _tx_to_dict(d.transaction),
        "slot": d.slot,
        "program_label": d.program_label,
        "fee_sol": _dec_to_str(d.fee_sol),
        "fee_payer": d.fee_payer,
        "balance_changes": {k: _dec_to_str(v) for k, v in d.balance_changes.items()},
    }
