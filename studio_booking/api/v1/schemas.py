from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from studio_booking.domain.entities.appointment import TimeOfDay
from studio_booking.domain.entities.availability import PaintMode


class ScheduleSchema(BaseModel):
    schedule: dict[str, bool] = Field(default_factory=dict)


class SlotUpdateSchema(BaseModel):
    day: int = Field(ge=0, le=6)
    hour: int = Field(ge=0, le=23)
    is_available: bool | None = None
    mode: PaintMode | None = None

    @model_validator(mode="after")
    def _one_of(self) -> "SlotUpdateSchema":
        if (self.is_available is None) == (self.mode is None):
            raise ValueError("Provide exactly one of is_available or mode")
        return self


class TemplateCreateSchema(BaseModel):
    name: str = ""
    schedule: dict[str, bool] = Field(default_factory=dict)


class TemplateSchema(BaseModel):
    id: str
    name: str
    schedule: dict[str, bool]
    recurrence: str
    created_at: datetime | None = None
    total_hours: int


class AppointmentSchema(BaseModel):
    id: str
    booking_id: str
    start: datetime
    end: datetime
    client_name: str | None = None
    client_email: str
    title: str


class MoveAppointmentSchema(BaseModel):
    start: datetime
    end: datetime


class SlotAvailabilitySchema(BaseModel):
    available: bool
    reason: str | None = None


class ConflictSchema(BaseModel):
    booking_id: str
    day: int
    hour: int
    slot_key: str
    date: datetime
    client_name: str | None = None


class ResolveConflictSchema(BaseModel):
    day: int = Field(ge=0, le=6)
    hour: int = Field(ge=0, le=23)


class SuggestionRequestSchema(BaseModel):
    duration_minutes: int = Field(gt=0, le=24 * 60)
    preferred_time_of_day: TimeOfDay | None = None
    prefer_group_with_other_appointments: bool | None = None


class SuggestedSlotSchema(BaseModel):
    id: str
    start: datetime
    end: datetime
    score: int


class BookingCreateSchema(BaseModel):
    start: datetime
    duration_minutes: int = Field(gt=0, le=24 * 60)
    client_name: str | None = None
    client_email: str = Field(min_length=3)
    payment_reference: str | None = None


class BookingSchema(BaseModel):
    id: str
    artist_id: str
    start: datetime
    end: datetime
    status: str
    payment_status: str
    payment_reference: str | None = None
