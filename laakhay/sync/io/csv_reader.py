"""CSV reader producing work items."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from ..core.exceptions import ValidationError
from ..models import WorkItem

logger = logging.getLogger(__name__)

ACCOUNT_ID_COLUMN = "ACCOUNT_ID_INT"
GROUP_KEY_COLUMN = "IMPACT_GROUP_SLUG"


def read_work_items(path: str | Path) -> list[WorkItem]:
    """Read work items from a CSV file, in file order.

    Only ``ACCOUNT_ID_INT`` and ``IMPACT_GROUP_SLUG`` are used; other columns
    are ignored. Rows missing either value, or with a non-integer account
    id, are skipped with a warning.

    Raises:
        ValidationError: If the file does not exist
    """
    csv_path = Path(path).resolve()
    if not csv_path.exists():
        raise ValidationError(f"CSV file not found: {csv_path}")

    logger.info(f"Reading CSV file: {csv_path}")
    items: list[WorkItem] = []

    with csv_path.open(newline="", encoding="utf-8-sig") as handle:
        for row in csv.DictReader(handle):
            account_id_raw = (row.get(ACCOUNT_ID_COLUMN) or "").strip()
            group_key = (row.get(GROUP_KEY_COLUMN) or "").strip()

            if not account_id_raw or not group_key:
                logger.warning(
                    f"Skipping row with missing data - Account ID: {account_id_raw!r}, "
                    f"Slug: {group_key!r}"
                )
                continue

            try:
                account_id = int(account_id_raw)
            except ValueError:
                logger.warning(f"Skipping row with invalid account ID: {account_id_raw}")
                continue

            items.append(WorkItem.from_record(account_id=account_id, group_key=group_key))

    logger.info(f"Successfully read {len(items)} valid accounts from CSV")
    return items
