from fastapi import APIRouter, HTTPException

from studio_booking.api.v1.schemas import (
    AppointmentSchema,
    BookingCreateSchema,
    BookingSchema,
    ConflictSchema,
    MoveAppointmentSchema,
    ResolveConflictSchema,
    ScheduleSchema,
    SlotAvailabilitySchema,
    SlotUpdateSchema,
    SuggestedSlotSchema,
    SuggestionRequestSchema,
    TemplateCreateSchema,
    TemplateSchema,
)
from studio_booking.application.exceptions import (
    ResourceMismatchError,
    SlotUnavailableError,
    StorageFailure,
    TemplateNotFoundError,
)
from studio_booking.application.use_cases.templates import total_hours
from studio_booking.domain.entities.appointment import AvailabilityConflict, ClientPreferences
from studio_booking.wiring.dependencies import (
    get_availability,
    get_calendar_events,
    get_conflict_detector,
    get_create_booking_use_case,
    get_slot_suggestion_engine,
    get_template_manager,
)

router = APIRouter()


def _conflicts(items: list[AvailabilityConflict]) -> list[ConflictSchema]:
    return [
        ConflictSchema(
            booking_id=c.booking_id,
            day=c.day,
            hour=c.hour,
            slot_key=c.slot_key,
            date=c.date,
            client_name=c.client_name,
        )
        for c in items
    ]


@router.get("/artists/{artist_id}/availability", response_model=ScheduleSchema)
def read_availability(artist_id: str):
    return ScheduleSchema(schedule=get_availability(artist_id).copy())


@router.put("/artists/{artist_id}/availability", response_model=ScheduleSchema)
def replace_availability(artist_id: str, req: ScheduleSchema):
    store = get_availability(artist_id)
    try:
        store.restore(req.schedule)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ScheduleSchema(schedule=store.copy())


@router.patch("/artists/{artist_id}/availability/slots", response_model=ScheduleSchema)
def update_slot(artist_id: str, req: SlotUpdateSchema):
    store = get_availability(artist_id)
    try:
        if req.mode is not None:
            store.toggle_slot(req.day, req.hour, req.mode)
        else:
            store.set_slot(req.day, req.hour, bool(req.is_available))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ScheduleSchema(schedule=store.copy())


@router.get("/templates", response_model=list[TemplateSchema])
def list_templates():
    return [
        TemplateSchema(
            id=t.id,
            name=t.name,
            schedule=dict(t.schedule),
            recurrence=t.recurrence,
            created_at=t.created_at,
            total_hours=total_hours(t.schedule),
        )
        for t in get_template_manager().list()
    ]


@router.post("/templates", status_code=201)
def create_template(req: TemplateCreateSchema) -> dict[str, str]:
    try:
        template_id = get_template_manager().create(req.name, req.schedule)
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"id": template_id}


@router.delete("/templates/{template_id}", status_code=204)
def delete_template(template_id: str) -> None:
    try:
        get_template_manager().delete(template_id)
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail=f"Template not found: {template_id}")
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/artists/{artist_id}/templates/{template_id}/apply", response_model=ScheduleSchema)
def apply_template(artist_id: str, template_id: str):
    store = get_availability(artist_id)
    try:
        store.restore(get_template_manager().apply(template_id))
    except TemplateNotFoundError:
        raise HTTPException(status_code=404, detail=f"Template not found: {template_id}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ScheduleSchema(schedule=store.copy())


@router.get("/artists/{artist_id}/events", response_model=list[AppointmentSchema])
def list_events(artist_id: str):
    return [
        AppointmentSchema(
            id=a.id,
            booking_id=a.booking_id,
            start=a.start,
            end=a.end,
            client_name=a.client_name,
            client_email=a.client_email,
            title=a.title,
        )
        for a in get_calendar_events().list_events(artist_id)
    ]


@router.post("/artists/{artist_id}/events/{booking_id}/move", response_model=SlotAvailabilitySchema)
def move_event(artist_id: str, booking_id: str, req: MoveAppointmentSchema):
    try:
        result = get_calendar_events().move_appointment(artist_id, booking_id, req.start, req.end)
    except ResourceMismatchError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not result.available:
        raise HTTPException(status_code=409, detail=result.reason)
    return SlotAvailabilitySchema(available=True)


@router.get("/artists/{artist_id}/conflicts", response_model=list[ConflictSchema])
def list_conflicts(artist_id: str):
    return _conflicts(get_conflict_detector(artist_id).refresh())


@router.post("/artists/{artist_id}/conflicts/resolve", response_model=list[ConflictSchema])
def resolve_conflict(artist_id: str, req: ResolveConflictSchema):
    try:
        remaining = get_conflict_detector(artist_id).mark_available(req.day, req.hour)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageFailure as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _conflicts(remaining)


@router.post("/artists/{artist_id}/suggestions", response_model=list[SuggestedSlotSchema])
def suggest_slots(artist_id: str, req: SuggestionRequestSchema):
    preferences = ClientPreferences(
        preferred_time_of_day=req.preferred_time_of_day,
        prefer_group_with_other_appointments=req.prefer_group_with_other_appointments,
    )
    slots = get_slot_suggestion_engine(artist_id).suggest(req.duration_minutes, preferences)
    return [SuggestedSlotSchema(id=s.id, start=s.start, end=s.end, score=s.score) for s in slots]


@router.post("/artists/{artist_id}/bookings", response_model=BookingSchema, status_code=201)
def create_booking(artist_id: str, req: BookingCreateSchema):
    try:
        booking = get_create_booking_use_case(artist_id).create_pending(
            start=req.start,
            duration_minutes=req.duration_minutes,
            client_name=req.client_name,
            client_email=req.client_email,
            payment_reference=req.payment_reference,
        )
    except SlotUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return BookingSchema(
        id=booking.id,
        artist_id=booking.artist_id,
        start=booking.start,
        end=booking.end,
        status=booking.status.value,
        payment_status=booking.payment_status.value,
        payment_reference=booking.payment_reference,
    )
