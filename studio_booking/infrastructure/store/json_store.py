from __future__ import annotations

import json
import threading
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from studio_booking.application.exceptions import StorageFailure
from studio_booking.application.ports.availability_store import AvailabilityStorePort
from studio_booking.application.ports.booking_store import BookingStorePort
from studio_booking.application.ports.template_store import TemplateStorePort
from studio_booking.domain.entities.availability import Schedule
from studio_booking.domain.entities.booking import (
    ACTIVE_STATUSES,
    Artist,
    Booking,
    BookingStatus,
    PaymentStatus,
)
from studio_booking.domain.entities.template import AvailabilityTemplate


class _JsonFile:
    """One JSON document on disk. Every save is a temp-file write plus an atomic rename."""

    def __init__(self, path: Path, default: dict[str, Any]) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._default = default
        self.lock = threading.Lock()

    def load(self) -> dict[str, Any]:
        if not self._path.exists():
            return json.loads(json.dumps(self._default))
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StorageFailure(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageFailure(f"Unexpected content in {self._path}")
        return data

    def save(self, data: dict[str, Any]) -> None:
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except (OSError, TypeError, ValueError) as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass
            raise StorageFailure(f"Cannot write {self._path}: {e}") from e


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class JsonAvailabilityStore(AvailabilityStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._file = _JsonFile(Path(data_dir) / "availability.json", {"schedules": {}, "version": 1})

    def load(self, artist_id: str) -> Schedule:
        with self._file.lock:
            data = self._file.load()
        raw = data.get("schedules", {}).get(artist_id, {})
        return {str(k): v for k, v in raw.items() if isinstance(v, bool)}

    def save(self, artist_id: str, schedule: Schedule) -> None:
        with self._file.lock:
            data = self._file.load()
            data.setdefault("schedules", {})[artist_id] = dict(schedule)
            self._file.save(data)


class JsonTemplateStore(TemplateStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._file = _JsonFile(Path(data_dir) / "templates.json", {"templates": [], "version": 1})

    def _serialize(self, template: AvailabilityTemplate) -> dict[str, Any]:
        return {
            "id": template.id,
            "name": template.name,
            "schedule": dict(template.schedule),
            "recurrence": template.recurrence,
            "created_at": _iso(template.created_at),
        }

    def _deserialize(self, data: dict[str, Any]) -> AvailabilityTemplate:
        return AvailabilityTemplate(
            id=data["id"],
            name=data.get("name", ""),
            schedule=dict(data.get("schedule") or {}),
            recurrence=data.get("recurrence", "weekly"),
            created_at=_parse_dt(data.get("created_at")),
        )

    def list(self) -> list[AvailabilityTemplate]:
        with self._file.lock:
            data = self._file.load()
        return [self._deserialize(t) for t in data.get("templates", [])]

    def get(self, template_id: str) -> AvailabilityTemplate | None:
        for template in self.list():
            if template.id == template_id:
                return template
        return None

    def add(self, template: AvailabilityTemplate) -> None:
        with self._file.lock:
            data = self._file.load()
            data.setdefault("templates", []).append(self._serialize(template))
            self._file.save(data)

    def delete(self, template_id: str) -> bool:
        with self._file.lock:
            data = self._file.load()
            templates = data.get("templates", [])
            remaining = [t for t in templates if t.get("id") != template_id]
            if len(remaining) == len(templates):
                return False
            data["templates"] = remaining
            self._file.save(data)
            return True


class JsonBookingStore(BookingStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        super().__init__()
        self._file = _JsonFile(
            Path(data_dir) / "bookings.json", {"bookings": {}, "artists": {}, "version": 1}
        )

    def _serialize(self, booking: Booking) -> dict[str, Any]:
        return {
            "id": booking.id,
            "artist_id": booking.artist_id,
            "start": booking.start.isoformat(),
            "end": booking.end.isoformat(),
            "client_name": booking.client_name,
            "client_email": booking.client_email,
            "status": booking.status.value,
            "payment_status": booking.payment_status.value,
            "payment_reference": booking.payment_reference,
            "calendar_integration_id": booking.calendar_integration_id,
            "created_at": _iso(booking.created_at),
            "updated_at": _iso(booking.updated_at),
            "confirmed_at": _iso(booking.confirmed_at),
        }

    def _deserialize(self, data: dict[str, Any]) -> Booking:
        return Booking(
            id=data["id"],
            artist_id=data["artist_id"],
            start=datetime.fromisoformat(data["start"]),
            end=datetime.fromisoformat(data["end"]),
            client_name=data.get("client_name"),
            client_email=data.get("client_email", ""),
            status=BookingStatus(data.get("status", "pending")),
            payment_status=PaymentStatus(data.get("payment_status", "pending")),
            payment_reference=data.get("payment_reference"),
            calendar_integration_id=data.get("calendar_integration_id"),
            created_at=_parse_dt(data.get("created_at")),
            updated_at=_parse_dt(data.get("updated_at")),
            confirmed_at=_parse_dt(data.get("confirmed_at")),
        )

    def _read_booking(self, data: dict[str, Any], booking_id: str) -> Booking | None:
        raw = data.get("bookings", {}).get(booking_id)
        return self._deserialize(raw) if raw else None

    def _write_booking(self, data: dict[str, Any], booking: Booking) -> None:
        data.setdefault("bookings", {})[booking.id] = self._serialize(booking)
        self._file.save(data)

    def add(self, booking: Booking) -> None:
        with self._file.lock:
            data = self._file.load()
            self._write_booking(data, booking)
        self._notify_changed(booking.artist_id)

    def get(self, booking_id: str) -> Booking | None:
        with self._file.lock:
            data = self._file.load()
        return self._read_booking(data, booking_id)

    def list_active(self, artist_id: str) -> list[Booking]:
        with self._file.lock:
            data = self._file.load()
        bookings = [self._deserialize(raw) for raw in data.get("bookings", {}).values()]
        active = [b for b in bookings if b.artist_id == artist_id and b.status in ACTIVE_STATUSES]
        return sorted(active, key=lambda b: b.start)

    def update_times(self, booking_id: str, artist_id: str, start: datetime, end: datetime) -> int:
        with self._file.lock:
            data = self._file.load()
            booking = self._read_booking(data, booking_id)
            if booking is None or booking.artist_id != artist_id:
                return 0
            self._write_booking(data, replace(booking, start=start, end=end, updated_at=datetime.now()))
        self._notify_changed(artist_id)
        return 1

    def set_payment_reference(self, booking_id: str, reference: str) -> int:
        with self._file.lock:
            data = self._file.load()
            booking = self._read_booking(data, booking_id)
            if booking is None or booking.status is not BookingStatus.pending:
                return 0
            self._write_booking(data, replace(booking, payment_reference=reference, updated_at=datetime.now()))
            return 1

    def confirm_if_pending(
        self,
        booking_id: str,
        calendar_integration_id: str | None,
        confirmed_at: datetime,
    ) -> int:
        with self._file.lock:
            data = self._file.load()
            booking = self._read_booking(data, booking_id)
            if booking is None or booking.status is not BookingStatus.pending:
                return 0
            confirmed = replace(
                booking,
                status=BookingStatus.confirmed,
                payment_status=PaymentStatus.deposit_paid,
                calendar_integration_id=calendar_integration_id or booking.calendar_integration_id,
                confirmed_at=confirmed_at,
                updated_at=confirmed_at,
            )
            self._write_booking(data, confirmed)
        self._notify_changed(booking.artist_id)
        return 1

    def get_artist(self, artist_id: str) -> Artist | None:
        with self._file.lock:
            data = self._file.load()
        raw = data.get("artists", {}).get(artist_id)
        if not raw:
            return None
        return Artist(
            id=raw["id"],
            email=raw.get("email", ""),
            name=raw.get("name", ""),
            cal_com_username=raw.get("cal_com_username"),
            cal_com_event_type_id=raw.get("cal_com_event_type_id"),
        )

    def add_artist(self, artist: Artist) -> None:
        with self._file.lock:
            data = self._file.load()
            data.setdefault("artists", {})[artist.id] = {
                "id": artist.id,
                "email": artist.email,
                "name": artist.name,
                "cal_com_username": artist.cal_com_username,
                "cal_com_event_type_id": artist.cal_com_event_type_id,
            }
            self._file.save(data)
