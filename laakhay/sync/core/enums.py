"""Core enumerations."""

from __future__ import annotations

from enum import Enum


class SyncVariant(str, Enum):
    """Kind of work a run dispatches."""

    ACCOUNTS = "accounts"
    INTERVALS = "intervals"


class RecoveryState(str, Enum):
    """Credential recovery state machine."""

    ACTIVE = "active"
    SUSPENDED = "suspended"


class FailureKind(str, Enum):
    """Classification of a failed dispatch attempt."""

    TRANSIENT = "transient"
    TERMINAL = "terminal"
    AUTHENTICATION = "authentication"
