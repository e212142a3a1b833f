"""JournalEntry data model."""

from datetime import date as date_type
from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, TypeAdapter, ValidationInfo, field_validator

_DATETIME = TypeAdapter(datetime)


class JournalEntry(BaseModel):
    """Represents one calendar day's gratitude entry.

    ``streak`` is derived data. It is maintained by the streak calculator
    and should not be assigned by callers.
    """

    id: UUID = Field(default_factory=uuid4, description="Entry identifier")
    date: date_type = Field(..., description="Calendar day of the entry")
    entry1: str = Field(default="", description="First thing to be grateful for")
    entry2: str = Field(default="", description="Second thing to be grateful for")
    entry3: str = Field(default="", description="Third thing to be grateful for")
    notes: str = Field(default="", description="Free-form notes")
    streak: int = Field(default=1, ge=1, description="Consecutive days ending here")

    model_config = {"validate_assignment": True}

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time(cls, value, info: ValidationInfo):
        # Timestamps such as "2024-01-01T05:00:00Z" are accepted too.
        if isinstance(value, str) and "T" in value:
            value = _DATETIME.validate_python(value)
        # Aware datetimes are read in the "tz" passed as validation context,
        # or the local zone without one; naive ones as wall time.
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.astimezone((info.context or {}).get("tz"))
            return value.date()
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _none_notes(cls, value):
        return "" if value is None else value

    @property
    def things(self) -> tuple[str, str, str]:
        """The three entries in order."""
        return (self.entry1, self.entry2, self.entry3)
