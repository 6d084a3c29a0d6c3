"""Wire request models sent to the sync endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GroupBucket(BaseModel):
    """Account ids sharing one group key within a single chunk."""

    group_slug: str = Field(..., min_length=1, alias="groupSlug")
    account_ids: list[int] = Field(default_factory=list, alias="accountIds")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def size(self) -> int:
        return len(self.account_ids)


class AssignmentPayload(BaseModel):
    """Request body for the account assignment endpoint.

    ``max_accounts`` and ``batch_size`` are opaque overrides interpreted by
    the remote endpoint. They are serialized only when configured.
    """

    groups: list[GroupBucket] = Field(..., alias="payload")
    max_accounts: int | None = Field(default=None, alias="maxAccounts")
    batch_size: int | None = Field(default=None, alias="batchSize")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="after")
    def validate_unique_groups(self) -> AssignmentPayload:
        """Validate group keys are unique within the payload."""
        slugs = [group.group_slug for group in self.groups]
        if len(slugs) != len(set(slugs)):
            raise ValueError("group keys must be unique within one payload")
        return self

    @property
    def overrides(self) -> dict[str, int]:
        return self.model_dump(
            by_alias=True, exclude_none=True, include={"max_accounts", "batch_size"}
        )

    @property
    def item_count(self) -> int:
        return sum(group.size for group in self.groups)

    def as_mapping(self) -> dict[str, list[int]]:
        """Group key to account ids, in first-seen key order."""
        return {group.group_slug: list(group.account_ids) for group in self.groups}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class IntervalRequest(BaseModel):
    """Request body for the time-interval sync endpoint."""

    start_time: str = Field(..., alias="startTime")
    end_time: str = Field(..., alias="endTime")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
