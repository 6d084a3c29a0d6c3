"""Laakhay Sync - Chunked, credential-aware bulk synchronization against admin APIs."""

from .core import (
    AccountSyncConfig,
    AuthenticationError,
    BaseSyncConfig,
    Credential,
    DispatchError,
    FailureKind,
    HTTPStatusError,
    IntervalSyncConfig,
    InvalidRangeError,
    MissingCredentialError,
    NeedsCredentialRefresh,
    RecoveryState,
    SyncError,
    SyncVariant,
    TerminalDispatchError,
    TransientDispatchError,
    ValidationError,
    load_config,
)
from .io import parse_datetime, read_work_items, validate_date_range
from .models import (
    AssignmentPayload,
    ChunkRecord,
    DispatchOutcome,
    FailureRecord,
    GroupBucket,
    IntervalRequest,
    RunStatistics,
    TimeWindow,
    WorkItem,
)
from .reporting import ReportWriter, format_execution_time, print_summary, to_12_hour
from .runtime import (
    ChunkPlanner,
    ChunkPolicy,
    CredentialProvider,
    CredentialRecoveryHandler,
    Dispatcher,
    DotenvCredentialProvider,
    HTTPClient,
    ItemChunk,
    PayloadBuilder,
    ResultAggregator,
    RetryPolicy,
    SyncEngine,
    WindowPlanner,
    WindowPolicy,
    generate_windows,
)

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "AccountSyncConfig",
    "BaseSyncConfig",
    "IntervalSyncConfig",
    "load_config",
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
    # Models
    "AssignmentPayload",
    "ChunkRecord",
    "DispatchOutcome",
    "FailureRecord",
    "GroupBucket",
    "IntervalRequest",
    "RunStatistics",
    "TimeWindow",
    "WorkItem",
    # Planning
    "ChunkPlanner",
    "ChunkPolicy",
    "ItemChunk",
    "WindowPlanner",
    "WindowPolicy",
    "generate_windows",
    "PayloadBuilder",
    # Dispatch
    "HTTPClient",
    "Dispatcher",
    "RetryPolicy",
    "CredentialProvider",
    "CredentialRecoveryHandler",
    "DotenvCredentialProvider",
    "ResultAggregator",
    "SyncEngine",
    # Input / reporting
    "read_work_items",
    "parse_datetime",
    "validate_date_range",
    "ReportWriter",
    "format_execution_time",
    "print_summary",
    "to_12_hour",
]
