"""Fake settings source and event emitter for testing."""

from __future__ import annotations

from pg_promoter.domain.events import FailoverEvent, FailoverEventType
from pg_promoter.domain.exceptions import PromoterConfigError
from pg_promoter.domain.settings import PromoterSettings


class FakeSettingsSource:
    """Fake implementation of SettingsSourcePort.

    Returns whatever settings were last given to it, or raises the
    configured PromoterConfigError.
    """

    def __init__(self, settings: PromoterSettings) -> None:
        self._settings = settings
        self._error: PromoterConfigError | None = None
        self.load_count = 0

    def set_settings(self, settings: PromoterSettings) -> None:
        self._settings = settings
        self._error = None

    def set_error(self, message: str) -> None:
        self._error = PromoterConfigError(message)

    def load(self) -> PromoterSettings:
        self.load_count += 1
        if self._error is not None:
            raise self._error
        return self._settings


class FakeEventEmitter:
    """Fake implementation of EventEmitterPort recording every event."""

    def __init__(self) -> None:
        self.events: list[FailoverEvent] = []

    @property
    def event_types(self) -> list[FailoverEventType]:
        return [event.event_type for event in self.events]

    def emit(self, event: FailoverEvent) -> None:
        self.events.append(event)

    def clear(self) -> None:
        self.events.clear()
