from __future__ import annotations

from enum import Enum


class TransactionStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ActivityLevel(str, Enum):
    # NONE only shows up in the dense heatmap series
    NONE = "NONE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TransferDirection(str, Enum):
    SENT = "SENT"
    RECEIVED = "RECEIVED"


class FundingKind(str, Enum):
    SOL = "SOL"
    TOKEN = "TOKEN"


class InputKind(str, Enum):
    TX = "tx"
    ADDRESS = "address"
    INVALID = "invalid"
