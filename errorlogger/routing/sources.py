"""Configuration sources: the narrow read interface the router depends on.

A source only needs ``get(key, default)``.  ``load_sink_configs`` turns the
flat ``<prefix>_<field>`` settings keys into one ``SinkConfig`` per sink
type, so nothing downstream performs dynamic key lookups.
"""

from __future__ import annotations

import json
import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from errorlogger.exceptions import ConfigSourceError
from errorlogger.models.catalog import SINK_SPECS
from errorlogger.models.sinks import ACTIVATION_ORDER, Severity, SinkConfig, SinkType

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})

# Keys whose suffix marks a boolean switch
_BOOLEAN_SUFFIXES = ("_enabled", "_debug", "_attachment")


@runtime_checkable
class ConfigSource(Protocol):
    """Read-only key/value settings store."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under *key*, or *default*."""
        ...


class MappingConfigSource:
    """Settings held in a plain mapping (parsed file, test fixture, ...)."""

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    @classmethod
    def from_file(cls, path: Path | str) -> MappingConfigSource:
        """Load settings from a JSON or TOML file.

        A TOML file may hold the keys at top level or inside an
        ``[errorlogger]`` table.

        Raises
        ------
        ConfigSourceError
            If the file is missing, unreadable, or not a mapping.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise ConfigSourceError(f"Cannot read settings file {path}: {exc}") from exc

        try:
            if path.suffix.lower() == ".toml":
                data = tomllib.loads(raw.decode("utf-8"))
                data = data.get("errorlogger", data)
            else:
                data = json.loads(raw)
        except (UnicodeDecodeError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
            raise ConfigSourceError(f"Cannot parse settings file {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigSourceError(
                f"Settings file {path} must contain a mapping, got {type(data).__name__}"
            )
        logger.debug("Loaded %d settings from %s", len(data), path)
        return cls(data)


class EnvConfigSource:
    """Settings read from environment variables.

    ``get("slack_token")`` reads ``ERRORLOGGER_SLACK_TOKEN``.  Boolean switch
    keys are coerced from the usual true/false spellings.
    """

    def __init__(self, prefix: str = "ERRORLOGGER_", environ: Mapping[str, str] | None = None) -> None:
        self._prefix = prefix
        self._environ = os.environ if environ is None else environ

    def get(self, key: str, default: Any = None) -> Any:
        value = self._environ.get(f"{self._prefix}{key.upper()}")
        if value is None:
            return default
        if key.endswith(_BOOLEAN_SUFFIXES):
            return _coerce_bool(value, default)
        return value


def _coerce_bool(value: Any, default: Any = False) -> Any:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        return default
    return bool(value)


def _read_level(source: ConfigSource, key: str) -> Severity:
    raw = source.get(key)
    if raw is None or raw == "":
        return Severity.DEBUG
    try:
        return Severity.parse(raw)
    except ValueError:
        logger.warning("Ignoring invalid level %r for %s; using DEBUG", raw, key)
        return Severity.DEBUG


def load_sink_config(source: ConfigSource, sink_type: SinkType) -> SinkConfig:
    """Read the settings of one sink type into a ``SinkConfig``."""
    spec = SINK_SPECS[sink_type]
    fields: dict[str, Any] = {}
    for name in spec.field_names:
        value = source.get(spec.key(name))
        if value is not None:
            fields[name] = value

    return SinkConfig(
        sink_type=sink_type,
        enabled=_coerce_bool(source.get(spec.key("enabled"), False)),
        required_fields=frozenset(spec.required),
        fields=fields,
        min_level=_read_level(source, spec.key("level")),
        debug=_coerce_bool(source.get(spec.key("debug"), False)),
    )


def load_sink_configs(source: ConfigSource) -> dict[SinkType, SinkConfig]:
    """Read the settings of every known sink type from *source*."""
    return {sink_type: load_sink_config(source, sink_type) for sink_type in ACTIVATION_ORDER}
