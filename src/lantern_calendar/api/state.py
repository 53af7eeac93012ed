from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..services import CalendarService, ReminderService, ServiceContext


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    calendar: CalendarService = field(init=False)
    reminders: ReminderService = field(init=False)

    def __post_init__(self) -> None:
        self._wire()

    def _wire(self) -> None:
        self.calendar = CalendarService(self.context)
        self.reminders = ReminderService(self.context)

    def use(self, context: Optional[ServiceContext] = None) -> None:
        """Swap in a new service context (a different source or settings)."""

        self.context = context or ServiceContext()
        self._wire()


api_state = ApiState()
