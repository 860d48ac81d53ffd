"""Session reporting for template checks and extractions.

A :class:`Session` records every success, warning and fatal event raised
while a workbook is processed, mirrors them to the ``xltemplate`` logger,
and turns fatal events into :class:`~xltemplate.core.errors.TemplateExtractionError`
instances so callers get one exception carrying the collected violations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, NoReturn, Sequence

from .errors import ERRORS_BY_CODE, TemplateExtractionError

LOGGER = logging.getLogger(__name__)

SUCCESS = "success"
WARNING = "warning"
ERROR = "error"


@dataclass(slots=True, frozen=True)
class SessionEvent:
    """A single reported event."""

    level: str
    component: str
    code: str
    message: str


@dataclass(slots=True)
class Session:
    """Collects reported events for one unit of work."""

    events: List[SessionEvent] = field(default_factory=list)

    def succeed(self, component: str, code: str, message: str, *args: object) -> None:
        self._record(SUCCESS, component, code, message, args)

    def warn(self, component: str, code: str, message: str, *args: object) -> None:
        self._record(WARNING, component, code, message, args)

    def error(
        self,
        component: str,
        code: str,
        message: str,
        *args: object,
        violations: Sequence[str] = (),
        **details: object,
    ) -> NoReturn:
        """Record a fatal event and raise the exception registered for ``code``."""

        event = self._record(ERROR, component, code, message, args)
        exc_type = ERRORS_BY_CODE.get(code, TemplateExtractionError)
        raise exc_type(event.message, component=component, violations=violations, **details)

    @property
    def warnings(self) -> List[SessionEvent]:
        return [event for event in self.events if event.level == WARNING]

    @property
    def successes(self) -> List[SessionEvent]:
        return [event for event in self.events if event.level == SUCCESS]

    @property
    def errors(self) -> List[SessionEvent]:
        return [event for event in self.events if event.level == ERROR]

    def codes(self, level: str | None = None) -> List[str]:
        return [event.code for event in self.events if level is None or event.level == level]

    def _record(
        self,
        level: str,
        component: str,
        code: str,
        message: str,
        args: tuple[object, ...],
    ) -> SessionEvent:
        text = message % args if args else message
        event = SessionEvent(level=level, component=component, code=code, message=text)
        self.events.append(event)
        log_level = {SUCCESS: logging.INFO, WARNING: logging.WARNING}.get(level, logging.ERROR)
        LOGGER.log(log_level, "[%s:%s] %s", component, code, text)
        return event


__all__ = ["Session", "SessionEvent", "SUCCESS", "WARNING", "ERROR"]
