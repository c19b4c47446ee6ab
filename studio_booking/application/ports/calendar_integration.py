from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class CalendarIntegrationPort(ABC):
    @abstractmethod
    def create_booking(
        self,
        resource_identity: str,
        event_type_identity: str,
        start_time: datetime,
        client_name: str,
        client_email: str,
    ) -> str:
        """Create a booking on the external calendar. Returns the integration booking id."""
        raise NotImplementedError
