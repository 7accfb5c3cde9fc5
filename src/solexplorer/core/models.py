from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from solexplorer.core.enums import ActivityLevel, FundingKind, TransactionStatus, TransferDirection


# Configuration model

@dataclass(frozen=True)
class TimelineConfig:
    """
    User input / run configuration for building an address timeline.
    """

    address: str
    limit: int = 100
    window_days: int = 365

    # optional knobs
    today: Optional[date] = None      # pin "now" (UTC) for the heatmap window
    before: Optional[str] = None      # start paging before this signature


# Timeline models

@dataclass(frozen=True)
class TimelineTransaction:

    signature: str
    timestamp: int
    type: str
    description: str
    source: str
    status: TransactionStatus
    sol_amount: Optional[Decimal] = None
    direction: Optional[TransferDirection] = None


@dataclass
class SourceGroup:

    address: str
    transactions: List[TimelineTransaction] = field(default_factory=list)
    total_transactions: int = 0
    sol_sent: Decimal = Decimal("0")
    sol_received: Decimal = Decimal("0")


@dataclass
class DayGroup:

    label: str                      # "Jan 5"
    date: datetime                  # UTC time of the first transaction seen that day
    day_of_week: str                # "Fri"
    total_transactions: int = 0
    total_value: Decimal = Decimal("0")
    activity_level: ActivityLevel = ActivityLevel.LOW
    by_sources: Dict[str, SourceGroup] = field(default_factory=dict)


@dataclass
class TimePeriodGroup:

    label: str                      # "January 2024"
    total_transactions: int = 0
    total_value: Decimal = Decimal("0")
    days: Dict[str, DayGroup] = field(default_factory=dict)


@dataclass
class TimelineData:

    by_time_period: Dict[str, TimePeriodGroup] = field(default_factory=dict)


@dataclass(frozen=True)
class HeatmapValue:

    date: str                       # YYYY-MM-DD
    count: int
    level: ActivityLevel


# Funding models

@dataclass(frozen=True)
class FundingTransfer:

    signature: str
    timestamp: int
    kind: FundingKind
    amount: Decimal                 # SOL for native transfers, token units otherwise
    mint: Optional[str] = None


@dataclass
class FundingSource:

    address: str
    total_sol: Decimal = Decimal("0")
    token_transfers: Dict[str, Decimal] = field(default_factory=dict)
    transactions: List[FundingTransfer] = field(default_factory=list)
    last_timestamp: int = 0


@dataclass
class TimelineReport:

    address: str
    transaction_count: int
    timeline: TimelineData
    heatmap: List[HeatmapValue] = field(default_factory=list)
    funding_sources: List[FundingSource] = field(default_factory=list)


# Single transaction view

@dataclass
class TransactionDetail:

    transaction: TimelineTransaction
    slot: int
    program_label: str              # indexer's source label, "" if unknown
    fee_sol: Decimal
    fee_payer: str
    balance_changes: Dict[str, Decimal] = field(default_factory=dict)   # pubkey -> SOL delta
