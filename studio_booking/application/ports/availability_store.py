from abc import ABC, abstractmethod

from studio_booking.domain.entities.availability import Schedule


class AvailabilityStorePort(ABC):
    @abstractmethod
    def load(self, artist_id: str) -> Schedule:
        raise NotImplementedError

    @abstractmethod
    def save(self, artist_id: str, schedule: Schedule) -> None:
        """Persist the whole grid in one write."""
        raise NotImplementedError
