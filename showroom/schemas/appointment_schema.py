"""Appointment and caller data models."""

import re
import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_TIME_PATTERN = re.compile(r"^\d{2}:\d{2}(:\d{2})?$")


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


ACTIVE_STATUSES = frozenset({AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED})


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AppointmentCreate(_CamelModel):
    """Payload handed to the store when a booking is accepted."""

    customer_id: str
    date: dt.date
    time: str
    status: AppointmentStatus = AppointmentStatus.PENDING
    created_by: Optional[str] = None


class Appointment(_CamelModel):
    """A showroom visit as persisted by the appointment store."""

    id: str
    customer_id: str
    date: dt.date
    time: str
    status: AppointmentStatus
    created_by: Optional[str] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    @field_validator("time")
    @classmethod
    def _check_time_format(cls, value: str) -> str:
        if not _TIME_PATTERN.match(value):
            raise ValueError(f"time must be HH:MM or HH:MM:SS, got {value!r}")
        return value

    @property
    def is_active(self) -> bool:
        """True when the appointment occupies its slot (pending or confirmed)."""
        return self.status in ACTIVE_STATUSES

    def to_json(self) -> dict[str, Any]:
        """Serialize with camelCase field names for a REST layer."""
        return self.model_dump(mode="json", by_alias=True)


class Caller(BaseModel):
    """Identity supplied by the authentication layer."""

    user_id: str
    is_staff: bool = False
    display_name: Optional[str] = Field(default=None, max_length=120)
