"""Base schema classes for API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CustomBase(BaseModel):
    """Base model with common configuration for all schemas.

    Example:
        class BoardResponse(CustomBase):
            id: str
            title: str
    """

    model_config = ConfigDict(
        # Allow creation from attribute-bearing objects
        from_attributes=True,
        # Use enum values instead of names
        use_enum_values=True,
        # Populate models by field name (not alias)
        populate_by_name=True,
        # Ignore extra fields (storage records carry more than we read)
        extra="ignore",
    )


class CamelModel(CustomBase):
    """Immutable model exchanged with camelCase field names.

    Example:
        class Summary(CamelModel):
            total_pending: int  # dumped as "totalPending" with by_alias=True
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        frozen=True,
    )
