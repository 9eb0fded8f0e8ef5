from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StateUpdate(BaseModel):
    """A single charger state observation carried as JSON in a message's first element."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    state_id: str = Field(validation_alias="StateId")
    value_as_string: Optional[str] = Field(None, validation_alias="ValueAsString")
    charger_id: Optional[str] = Field(None, validation_alias="ChargerId")
    timestamp: Optional[str] = Field(None, validation_alias="Timestamp")

    @field_validator("state_id", "value_as_string", mode="before")
    @classmethod
    def _number_as_str(cls, value):
        if isinstance(value, bool):
            raise ValueError("expected a number or string")
        # 710.0 -> "710"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)):
            return str(value)
        return value
