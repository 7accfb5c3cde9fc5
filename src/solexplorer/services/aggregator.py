from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional

from solexplorer.config import settings
from solexplorer.core.dto import RawTransaction
from solexplorer.core.enums import ActivityLevel, TransferDirection
from solexplorer.core.models import DayGroup, SourceGroup, TimelineData, TimePeriodGroup
from solexplorer.logging_setup import get_logger
from solexplorer.services.classifier import classify_transaction

logger = get_logger(__name__)

# fixed English names so labels don't depend on the process locale
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def activity_level_for(
    count: int,
    medium_threshold: int = settings.ACTIVITY_MEDIUM_THRESHOLD,
    high_threshold: int = settings.ACTIVITY_HIGH_THRESHOLD,
) -> ActivityLevel:
    if count > high_threshold:
        return ActivityLevel.HIGH
    if count > medium_threshold:
        return ActivityLevel.MEDIUM
    return ActivityLevel.LOW


def utc_datetime(timestamp: int) -> Optional[datetime]:
    try:
        return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
    except (OverflowError, OSError, ValueError, TypeError):
        return None


def day_key(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%d")


def period_key(dt: datetime) -> str:
    return dt.strftime("%Y-%m")


def period_label(dt: datetime) -> str:
    return f"{MONTH_NAMES[dt.month - 1]} {dt.year}"


def day_label(dt: datetime) -> str:
    return f"{MONTH_NAMES[dt.month - 1][:3]} {dt.day}"


def aggregate_transactions(
    transactions: Iterable[RawTransaction],
    address: str,
    medium_threshold: int = settings.ACTIVITY_MEDIUM_THRESHOLD,
    high_threshold: int = settings.ACTIVITY_HIGH_THRESHOLD,
) -> TimelineData:
    """
    Fold raw transactions into month -> day (UTC) -> counterparty buckets.

    Grouping is by key, so the result only depends on the input content;
    order inside a source group follows the input order. Transactions whose
    timestamp can't be turned into a UTC date are skipped.
    """
    timeline = TimelineData()
    skipped = 0

    for raw in transactions:
        when = utc_datetime(raw.timestamp)
        if when is None:
            skipped += 1
            logger.warning("Skipping %s: invalid timestamp %r", raw.signature, raw.timestamp)
            continue

        tx = classify_transaction(raw, address)

        pkey = period_key(when)
        period = timeline.by_time_period.get(pkey)
        if period is None:
            period = TimePeriodGroup(label=period_label(when))
            timeline.by_time_period[pkey] = period

        dkey = day_key(when)
        day = period.days.get(dkey)
        if day is None:
            day = DayGroup(
                label=day_label(when),
                date=when,
                day_of_week=WEEKDAY_NAMES[when.weekday()],
            )
            period.days[dkey] = day

        group = day.by_sources.get(tx.source)
        if group is None:
            group = SourceGroup(address=tx.source)
            day.by_sources[tx.source] = group

        group.transactions.append(tx)
        group.total_transactions += 1

        if tx.type == "TRANSFER" and tx.sol_amount is not None:
            if tx.direction == TransferDirection.SENT:
                group.sol_sent += tx.sol_amount
            else:
                group.sol_received += tx.sol_amount

        value = tx.sol_amount if tx.sol_amount is not None else Decimal("0")
        day.total_transactions += 1
        day.total_value += value
        period.total_transactions += 1
        period.total_value += value

    for period in timeline.by_time_period.values():
        for day in period.days.values():
            day.activity_level = activity_level_for(
                day.total_transactions, medium_threshold, high_threshold
            )

    if skipped:
        logger.info("Aggregated timeline for %s with %d transaction(s) skipped", address, skipped)
    return timeline
