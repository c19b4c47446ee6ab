from abc import ABC, abstractmethod

from studio_booking.domain.entities.booking import Artist, Booking


class NotifierPort(ABC):
    @abstractmethod
    def booking_confirmed(self, artist: Artist, booking: Booking) -> str | None:
        """Tell the artist a booking was confirmed. Returns a provider message id if any."""
        raise NotImplementedError
