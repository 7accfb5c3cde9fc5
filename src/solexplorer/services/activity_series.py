from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from solexplorer.config import settings
from solexplorer.core.enums import ActivityLevel
from solexplorer.core.models import HeatmapValue, TimelineData
from solexplorer.services.aggregator import activity_level_for


def heatmap_level_for(
    count: int,
    medium_threshold: int = settings.ACTIVITY_MEDIUM_THRESHOLD,
    high_threshold: int = settings.ACTIVITY_HIGH_THRESHOLD,
) -> ActivityLevel:
    if count <= 0:
        return ActivityLevel.NONE
    return activity_level_for(count, medium_threshold, high_threshold)


def build_daily_series(
    timeline: TimelineData,
    window_days: int = settings.HEATMAP_WINDOW_DAYS,
    today: Optional[date] = None,
    medium_threshold: int = settings.ACTIVITY_MEDIUM_THRESHOLD,
    high_threshold: int = settings.ACTIVITY_HIGH_THRESHOLD,
) -> List[HeatmapValue]:
    """
    Dense per-day series over [today - window_days + 1, today], ascending.

    Days without transactions are present with count 0 / NONE. Days of the
    timeline outside the window are ignored.
    """
    if window_days < 1:
        raise ValueError("window_days must be >= 1")

    end = today or datetime.now(timezone.utc).date()
    start = end - timedelta(days=window_days - 1)

    # dict keeps construction order, which is ascending by date
    counts: Dict[str, Tuple[int, ActivityLevel]] = {}
    for offset in range(window_days):
        counts[(start + timedelta(days=offset)).isoformat()] = (0, ActivityLevel.NONE)

    for period in timeline.by_time_period.values():
        for key, day in period.days.items():
            if key in counts:
                n = day.total_transactions
                counts[key] = (n, heatmap_level_for(n, medium_threshold, high_threshold))

    return [HeatmapValue(date=d, count=n, level=lvl) for d, (n, lvl) in counts.items()]
