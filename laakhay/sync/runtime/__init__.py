"""Runtime: chunk planning, dispatch, credential recovery and aggregation."""

from .aggregator import ResultAggregator
from .chunking import (
    ChunkPlanner,
    ChunkPolicy,
    ItemChunk,
    WindowPlanner,
    WindowPolicy,
    generate_windows,
)
from .engine import SyncEngine, account_planning
from .payloads import PayloadBuilder, build_interval_request
from .recovery import (
    ConsoleConfirmation,
    CredentialProvider,
    CredentialRecoveryHandler,
    DotenvCredentialProvider,
)
from .rest import Dispatcher, HTTPClient, RetryPolicy, describe_error

__all__ = [
    "ChunkPlanner",
    "ChunkPolicy",
    "ItemChunk",
    "WindowPlanner",
    "WindowPolicy",
    "generate_windows",
    "PayloadBuilder",
    "build_interval_request",
    "Dispatcher",
    "HTTPClient",
    "RetryPolicy",
    "describe_error",
    "ConsoleConfirmation",
    "CredentialProvider",
    "CredentialRecoveryHandler",
    "DotenvCredentialProvider",
    "ResultAggregator",
    "SyncEngine",
    "account_planning",
]
