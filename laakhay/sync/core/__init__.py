"""Core components."""

from .config import (
    AccountSyncConfig,
    BaseSyncConfig,
    IntervalSyncConfig,
    load_config,
    mask_token,
    read_source,
)
from .credential import Credential
from .enums import FailureKind, RecoveryState, SyncVariant
from .exceptions import (
    AuthenticationError,
    DispatchError,
    HTTPStatusError,
    InvalidRangeError,
    MissingCredentialError,
    NeedsCredentialRefresh,
    SyncError,
    TerminalDispatchError,
    TransientDispatchError,
    ValidationError,
)

__all__ = [
    # Configuration
    "AccountSyncConfig",
    "BaseSyncConfig",
    "IntervalSyncConfig",
    "load_config",
    "mask_token",
    "read_source",
    "Credential",
    # Enums
    "FailureKind",
    "RecoveryState",
    "SyncVariant",
    # Exceptions
    "SyncError",
    "ValidationError",
    "InvalidRangeError",
    "MissingCredentialError",
    "HTTPStatusError",
    "DispatchError",
    "TransientDispatchError",
    "TerminalDispatchError",
    "AuthenticationError",
    "NeedsCredentialRefresh",
]
