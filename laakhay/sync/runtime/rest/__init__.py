"""REST runtime abstractions."""

from .dispatcher import Dispatcher
from .http_client import HTTPClient
from .retry import RetryPolicy, describe_error

__all__ = [
    "Dispatcher",
    "HTTPClient",
    "RetryPolicy",
    "describe_error",
]
