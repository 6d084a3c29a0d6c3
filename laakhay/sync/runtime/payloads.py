"""Payload building for chunk dispatch."""

from __future__ import annotations

from collections.abc import Iterable

from ..models import AssignmentPayload, GroupBucket, IntervalRequest, TimeWindow, WorkItem
from .chunking.definitions import ItemChunk


class PayloadBuilder:
    """Turns one chunk of work items into an AssignmentPayload.

    Items are grouped by group key in first-seen key order. The endpoint
    overrides are attached only when configured (None means "not configured").
    Group sizes are not validated here; ``oversized_groups`` lets the caller
    surface large groups as a warning.
    """

    def __init__(
        self,
        *,
        max_accounts: int | None = None,
        batch_size: int | None = None,
        group_size_warning: int | None = None,
    ) -> None:
        self.max_accounts = max_accounts
        self.batch_size = batch_size
        self.group_size_warning = group_size_warning

    @staticmethod
    def group_by_key(items: Iterable[WorkItem]) -> list[GroupBucket]:
        groups: dict[str, list[int]] = {}
        for item in items:
            groups.setdefault(item.group_key, []).append(item.account_id)
        return [GroupBucket(group_slug=slug, account_ids=ids) for slug, ids in groups.items()]

    def build(self, chunk: ItemChunk | Iterable[WorkItem]) -> AssignmentPayload:
        items = chunk.items if isinstance(chunk, ItemChunk) else chunk
        return AssignmentPayload(
            groups=self.group_by_key(items),
            max_accounts=self.max_accounts,
            batch_size=self.batch_size,
        )

    def oversized_groups(self, payload: AssignmentPayload) -> list[GroupBucket]:
        if self.group_size_warning is None:
            return []
        return [group for group in payload.groups if group.size > self.group_size_warning]


def build_interval_request(window: TimeWindow) -> IntervalRequest:
    return window.to_request()
