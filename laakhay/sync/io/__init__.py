"""Input collaborators: CSV work items and date ranges."""

from .csv_reader import ACCOUNT_ID_COLUMN, GROUP_KEY_COLUMN, read_work_items
from .dates import parse_datetime, validate_date_range

__all__ = [
    "ACCOUNT_ID_COLUMN",
    "GROUP_KEY_COLUMN",
    "read_work_items",
    "parse_datetime",
    "validate_date_range",
]
