"""Shared base for backend payload models."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

logger = logging.getLogger(__name__)


class Payload(BaseModel):
    """Lenient model for pass-through backend JSON.

    The backend omits fields freely and sends ``null`` for anything it could
    not read from OpenDental. Nulls are dropped before validation so every
    field falls back to its default: collections to empty, scalars to None.
    A field whose value has the wrong type falls back to its default too,
    and list items that don't fit are dropped, so one odd value never
    discards the rest of the payload. Unknown keys are kept so nothing the
    backend sends is lost.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("*", mode="wrap")
    @classmethod
    def _default_on_error(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError as e:
            default = cls.model_fields[info.field_name].get_default(call_default_factory=True)
            if isinstance(value, list) and isinstance(default, list):
                return cls._valid_items(value, handler, info.field_name)
            logger.debug(
                "%s.%s: unreadable value %r replaced by default (%s)",
                cls.__name__,
                info.field_name,
                value,
                e.errors()[0]["type"],
            )
            return default

    @classmethod
    def _valid_items(
        cls, items: list[Any], handler: ValidatorFunctionWrapHandler, field: str | None
    ) -> list[Any]:
        """Validate list items one by one, keeping the ones that fit."""
        kept = []
        for item in items:
            try:
                kept.extend(handler([item]))
            except ValidationError:
                logger.debug("%s.%s: dropped item %r", cls.__name__, field, item)
        return kept

    def is_empty(self) -> bool:
        """True when the backend sent nothing for this object."""
        return not self.model_fields_set and not self.model_extra
