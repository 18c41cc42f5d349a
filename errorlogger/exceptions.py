"""Exception hierarchy for errorlogger.

Skipping a sink is normal control flow and never raises.  These errors are
either converted into an ``ActivationReport`` outcome by the router or
raised to the host when its own input cannot be read.
"""

from __future__ import annotations


class ErrorLoggerError(RuntimeError):
    """Base error for this package."""


class SinkConstructionError(ErrorLoggerError):
    """Raised when a sink's transport cannot be initialized.

    The router records it as a ``construction_failure`` outcome and goes on
    with the remaining sink types.
    """


class ConfigSourceError(ErrorLoggerError):
    """Raised when a settings file cannot be read or parsed."""
