# =============================================================================
# core/models/common.py - Shared Response Envelope
# =============================================================================
# Every successful response body has the same shape:
#   {"success": true, "message": "...", "data": ...}
# =============================================================================

from datetime import datetime, timezone
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset; stored values are always UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDateTime = Annotated[datetime, AfterValidator(_as_utc)]


class CamelModel(BaseModel):
    """
    Base for API schemas.

    Fields are snake_case in Python and camelCase on the wire
    (full_name <-> fullName). Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Success envelope returned by every endpoint.

    Example:
        {
            "success": true,
            "message": "Images retrieved successfully",
            "data": [...]
        }
    """

    success: bool = Field(default=True, description="Always true for 2xx responses")
    message: str = Field(..., description="Human-readable outcome")
    data: DataT | None = Field(default=None, description="Endpoint-specific payload")
