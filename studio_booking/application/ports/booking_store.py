from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable

from studio_booking.domain.entities.booking import Artist, Booking

# Called with the artist id whose active bookings changed.
BookingChangeListener = Callable[[str], None]


class BookingStorePort(ABC):
    def __init__(self) -> None:
        self._listeners: list[BookingChangeListener] = []

    def subscribe(self, listener: BookingChangeListener) -> None:
        self._listeners.append(listener)

    def _notify_changed(self, artist_id: str) -> None:
        # Must run outside any store lock, listeners read the store back.
        for listener in list(self._listeners):
            listener(artist_id)

    @abstractmethod
    def add(self, booking: Booking) -> None:
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def list_active(self, artist_id: str) -> list[Booking]:
        """Bookings with status pending or confirmed, ordered by start."""
        raise NotImplementedError

    @abstractmethod
    def update_times(self, booking_id: str, artist_id: str, start: datetime, end: datetime) -> int:
        """
        UPDATE ... SET start, end WHERE id = booking_id AND artist_id = artist_id.
        Returns the number of rows affected (0 or 1).
        """
        raise NotImplementedError

    @abstractmethod
    def set_payment_reference(self, booking_id: str, reference: str) -> int:
        """Store the expected processor reference while the booking is pending. Returns rows affected."""
        raise NotImplementedError

    @abstractmethod
    def confirm_if_pending(
        self,
        booking_id: str,
        calendar_integration_id: str | None,
        confirmed_at: datetime,
    ) -> int:
        """
        UPDATE ... SET status=confirmed, payment_status=deposit_paid, ...
        WHERE id = booking_id AND status = 'pending'.
        Returns the number of rows affected; exactly one concurrent caller sees 1.
        """
        raise NotImplementedError

    @abstractmethod
    def get_artist(self, artist_id: str) -> Artist | None:
        raise NotImplementedError

    @abstractmethod
    def add_artist(self, artist: Artist) -> None:
        raise NotImplementedError
