"""Work item data model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError


class WorkItem(BaseModel):
    """One account record keyed by its grouping attribute."""

    account_id: int = Field(..., strict=True, alias="accountId")
    group_key: str = Field(..., min_length=1, alias="groupKey")

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    @classmethod
    def from_record(cls, **fields: Any) -> WorkItem:
        """Build a work item, raising the library ValidationError on bad input."""
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in item['loc']) or 'record'}: {item['msg']}"
                for item in e.errors()
            )
            raise ValidationError(f"Invalid work item: {details}") from e
