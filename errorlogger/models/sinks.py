"""Sink configuration and activation report models.

``SinkConfig`` is the read-only snapshot of one sink type's settings taken at
activation time.  ``ActivationReport`` is the only observable result of an
activation pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SinkType(str, Enum):
    """Known sink types, declared in activation order."""

    NATIVE_MAIL = "native_mail"
    HOST_MAIL = "host_mail"
    CHAT_WEBHOOK = "chat_webhook"
    SYSLOG = "syslog"
    APM = "apm"


# Iteration order of SinkType is the activation order.
ACTIVATION_ORDER: tuple[SinkType, ...] = tuple(SinkType)


class SinkKind(str, Enum):
    """What a constructed sink talks to."""

    MAIL = "mail"
    CHAT_WEBHOOK = "chat_webhook"
    SYSLOG = "syslog"
    APM = "apm"


SINK_KINDS: dict[SinkType, SinkKind] = {
    SinkType.NATIVE_MAIL: SinkKind.MAIL,
    SinkType.HOST_MAIL: SinkKind.MAIL,
    SinkType.CHAT_WEBHOOK: SinkKind.CHAT_WEBHOOK,
    SinkType.SYSLOG: SinkKind.SYSLOG,
    SinkType.APM: SinkKind.APM,
}


class Severity(IntEnum):
    """Minimum record severity a sink accepts.  Lower is more verbose."""

    DEBUG = 100
    INFO = 200
    WARNING = 300
    ERROR = 400
    CRITICAL = 500

    @classmethod
    def parse(cls, value: Any) -> Severity:
        """Coerce a stored level into a ``Severity``.

        Accepts a ``Severity``, a 100-scale integer, a stdlib ``logging``
        level (10-50), a numeric string, or a level name such as
        ``"error"``.  Raises ``ValueError`` for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid severity: {value!r}")
        if isinstance(value, str):
            text = value.strip()
            if text.lstrip("-").isdigit():
                value = int(text)
            else:
                try:
                    return cls[text.upper()]
                except KeyError:
                    raise ValueError(f"Unknown severity name: {value!r}") from None
        if isinstance(value, int):
            if value in cls._value2member_map_:
                return cls(value)
            if value in _STDLIB_LEVELS:
                return _STDLIB_LEVELS[value]
        raise ValueError(f"Invalid severity: {value!r}")

    def to_logging_level(self) -> int:
        """Return the equivalent stdlib ``logging`` level."""
        return self.value // 10


_STDLIB_LEVELS: dict[int, Severity] = {
    logging.DEBUG: Severity.DEBUG,
    logging.INFO: Severity.INFO,
    logging.WARNING: Severity.WARNING,
    logging.ERROR: Severity.ERROR,
    logging.CRITICAL: Severity.CRITICAL,
}


def is_blank(value: Any) -> bool:
    """Return True when a settings value counts as not provided.

    Only None, whitespace-only strings and empty collections are blank.
    Unlike a PHP-style falsy check, ``0`` and ``"0"`` are real values, so a
    syslog facility of 0 (``kern``) is accepted.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return not value
    return False


class SinkConfig(BaseModel):
    """Settings snapshot for one sink type.

    ``fields`` holds the type-specific values (recipient address, token,
    ident, ...).  The sink is activatable only when every name in
    ``required_fields`` maps to a non-blank value in ``fields``.
    """

    model_config = ConfigDict(frozen=True)

    sink_type: SinkType
    enabled: bool = False
    required_fields: frozenset[str] = frozenset()
    fields: dict[str, Any] = Field(default_factory=dict)
    min_level: Severity = Severity.DEBUG
    debug: bool = False

    @field_validator("min_level", mode="before")
    @classmethod
    def _coerce_min_level(cls, value: Any) -> Severity:
        if value is None:
            return Severity.DEBUG
        return Severity.parse(value)

    def missing_fields(self, required: Iterable[str] = ()) -> list[str]:
        """Return required field names that are absent or blank, sorted.

        *required* adds names to check on top of ``required_fields``.
        """
        return sorted(
            name for name in self.required_fields | frozenset(required)
            if is_blank(self.fields.get(name))
        )

    @property
    def is_activatable(self) -> bool:
        return not self.missing_fields()


class SkipReason(str, Enum):
    """Why a sink type was not attached."""

    DISABLED = "disabled"
    MISSING_FIELDS = "missing_fields"
    DEBUG_SUPPRESSED = "debug_suppressed"
    CONSTRUCTION_FAILURE = "construction_failure"


class SinkOutcome(BaseModel):
    """A skipped sink type and the reason it was skipped."""

    model_config = ConfigDict(frozen=True)

    sink_type: SinkType
    reason: SkipReason
    detail: str = ""


class ActivationReport(BaseModel):
    """Result of one activation pass.

    ``attached`` lists sink types in the order they were attached to the
    pipeline; ``skipped`` maps every other known sink type to its outcome.
    """

    attached: list[SinkType] = Field(default_factory=list)
    skipped: dict[SinkType, SinkOutcome] = Field(default_factory=dict)

    def record_attached(self, sink_type: SinkType) -> None:
        self.attached.append(sink_type)

    def record_skipped(self, outcome: SinkOutcome) -> None:
        self.skipped[outcome.sink_type] = outcome

    @property
    def attached_types(self) -> frozenset[SinkType]:
        return frozenset(self.attached)

    @property
    def skip_reasons(self) -> dict[SinkType, SkipReason]:
        return {sink_type: outcome.reason for sink_type, outcome in self.skipped.items()}

    @property
    def failures(self) -> list[SinkOutcome]:
        """Outcomes whose transport could not be constructed."""
        return [
            outcome for outcome in self.skipped.values()
            if outcome.reason is SkipReason.CONSTRUCTION_FAILURE
        ]

    def summary(self) -> str:
        """One-line description suitable for a startup log record."""
        attached = ", ".join(t.value for t in self.attached) or "none"
        skipped = ", ".join(
            f"{t.value}={o.reason.value}" for t, o in self.skipped.items()
        ) or "none"
        return f"attached: {attached}; skipped: {skipped}"
