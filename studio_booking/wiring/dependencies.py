from functools import lru_cache
import logging

from studio_booking.core.config import settings
from studio_booking.application.ports.availability_store import AvailabilityStorePort
from studio_booking.application.ports.booking_store import BookingStorePort
from studio_booking.application.ports.calendar_integration import CalendarIntegrationPort
from studio_booking.application.ports.notifier import NotifierPort
from studio_booking.application.ports.template_store import TemplateStorePort
from studio_booking.application.use_cases.availability import AvailabilityStore
from studio_booking.application.use_cases.calendar_events import CalendarEventSource
from studio_booking.application.use_cases.confirm_booking import BookingConfirmationUseCase
from studio_booking.application.use_cases.conflicts import ConflictDetector
from studio_booking.application.use_cases.create_booking import CreateBookingUseCase
from studio_booking.application.use_cases.suggest_slots import SlotSuggestionEngine
from studio_booking.application.use_cases.templates import TemplateManager
from studio_booking.infrastructure.calendar.cal_com_client import CalComCalendar
from studio_booking.infrastructure.calendar.mock_calendar import MockCalendar
from studio_booking.infrastructure.notifications.mock_notifier import MockNotifier
from studio_booking.infrastructure.notifications.resend_notifier import ResendNotifier
from studio_booking.infrastructure.store.json_store import (
    JsonAvailabilityStore,
    JsonBookingStore,
    JsonTemplateStore,
)
from studio_booking.infrastructure.store.memory_store import (
    MemoryAvailabilityStore,
    MemoryBookingStore,
    MemoryTemplateStore,
)


logger = logging.getLogger(__name__)

# One editing session per artist: the grid and its conflict list live here.
_availability: dict[str, AvailabilityStore] = {}
_detectors: dict[str, ConflictDetector] = {}


def _use_json() -> bool:
    return settings.STORE_PROVIDER.lower() == "json"


@lru_cache
def get_availability_persistence() -> AvailabilityStorePort:
    if _use_json():
        return JsonAvailabilityStore(data_dir=settings.DATA_DIR)
    return MemoryAvailabilityStore()


@lru_cache
def get_template_store() -> TemplateStorePort:
    if _use_json():
        return JsonTemplateStore(data_dir=settings.DATA_DIR)
    return MemoryTemplateStore()


@lru_cache
def get_booking_store() -> BookingStorePort:
    if _use_json():
        return JsonBookingStore(data_dir=settings.DATA_DIR)
    return MemoryBookingStore()


@lru_cache
def get_calendar_integration() -> CalendarIntegrationPort:
    if not settings.CAL_COM_API_KEY or settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockCalendar (CAL_COM_API_KEY missing or ENV=dev/local)")
        return MockCalendar()
    return CalComCalendar()


@lru_cache
def get_notifier() -> NotifierPort:
    if not settings.RESEND_API_KEY:
        logger.info("Using MockNotifier (RESEND_API_KEY missing)")
        return MockNotifier()
    return ResendNotifier()


def get_template_manager() -> TemplateManager:
    return TemplateManager(store=get_template_store())


def get_calendar_events() -> CalendarEventSource:
    return CalendarEventSource(store=get_booking_store())


def get_availability(artist_id: str) -> AvailabilityStore:
    if artist_id not in _availability:
        _availability[artist_id] = AvailabilityStore(
            artist_id=artist_id,
            store=get_availability_persistence(),
            hour_start=settings.HOUR_START,
            hour_end=settings.HOUR_END,
        )
    return _availability[artist_id]


def get_conflict_detector(artist_id: str) -> ConflictDetector:
    if artist_id not in _detectors:
        _detectors[artist_id] = ConflictDetector(
            availability=get_availability(artist_id),
            events=get_calendar_events(),
        )
    return _detectors[artist_id]


def get_slot_suggestion_engine(artist_id: str) -> SlotSuggestionEngine:
    return SlotSuggestionEngine(
        availability=get_availability(artist_id),
        events=get_calendar_events(),
        days_ahead=settings.SUGGESTION_DAYS_AHEAD,
        step_minutes=settings.SUGGESTION_STEP_MINUTES,
        limit=settings.SUGGESTION_LIMIT,
    )


def get_create_booking_use_case(artist_id: str) -> CreateBookingUseCase:
    return CreateBookingUseCase(
        store=get_booking_store(),
        availability=get_availability(artist_id),
        events=get_calendar_events(),
    )


def get_booking_confirmation_use_case() -> BookingConfirmationUseCase:
    return BookingConfirmationUseCase(
        store=get_booking_store(),
        calendar=get_calendar_integration(),
        notifier=get_notifier(),
    )


def reset_container() -> None:
    """Drop cached adapters and editing sessions (tests, settings reload)."""
    _availability.clear()
    _detectors.clear()
    for factory in (
        get_availability_persistence,
        get_template_store,
        get_booking_store,
        get_calendar_integration,
        get_notifier,
    ):
        factory.cache_clear()
