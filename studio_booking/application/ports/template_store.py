from abc import ABC, abstractmethod

from studio_booking.domain.entities.template import AvailabilityTemplate


class TemplateStorePort(ABC):
    @abstractmethod
    def list(self) -> list[AvailabilityTemplate]:
        raise NotImplementedError

    @abstractmethod
    def get(self, template_id: str) -> AvailabilityTemplate | None:
        raise NotImplementedError

    @abstractmethod
    def add(self, template: AvailabilityTemplate) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, template_id: str) -> bool:
        """Remove a template. Returns False if it did not exist."""
        raise NotImplementedError
