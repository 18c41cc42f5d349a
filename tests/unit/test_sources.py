"""Unit tests for configuration sources and SinkConfig loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from errorlogger.exceptions import ConfigSourceError
from errorlogger.models.sinks import Severity, SinkType
from errorlogger.routing.sources import (
    ConfigSource,
    EnvConfigSource,
    MappingConfigSource,
    load_sink_config,
    load_sink_configs,
)


# ---------------------------------------------------------------------------
# Test: MappingConfigSource
# ---------------------------------------------------------------------------


class TestMappingConfigSource:
    def test_get_with_default(self):
        source = MappingConfigSource({"slack_token": "abc"})
        assert source.get("slack_token") == "abc"
        assert source.get("slack_channel", "random") == "random"
        assert source.get("slack_channel") is None

    def test_protocol_compliance(self):
        assert isinstance(MappingConfigSource(), ConfigSource)
        assert isinstance(EnvConfigSource(environ={}), ConfigSource)

    def test_from_json_file(self, tmp_path: Path):
        path = tmp_path / "sinks.json"
        path.write_text(json.dumps({"syslog_enabled": True, "syslog_ident": "shop"}))
        source = MappingConfigSource.from_file(path)
        assert source.get("syslog_ident") == "shop"

    def test_from_toml_file_with_table(self, tmp_path: Path):
        path = tmp_path / "sinks.toml"
        path.write_text('[errorlogger]\nnewrelic_enabled = true\nnewrelic_appname = "shop"\n')
        source = MappingConfigSource.from_file(path)
        assert source.get("newrelic_appname") == "shop"
        assert source.get("newrelic_enabled") is True

    def test_from_toml_file_top_level(self, tmp_path: Path):
        path = tmp_path / "sinks.toml"
        path.write_text('slack_token = "abc"\n')
        assert MappingConfigSource.from_file(path).get("slack_token") == "abc"

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(ConfigSourceError, match="Cannot read"):
            MappingConfigSource.from_file(tmp_path / "absent.json")

    def test_malformed_file_raises(self, tmp_path: Path):
        path = tmp_path / "sinks.json"
        path.write_text("{not json")
        with pytest.raises(ConfigSourceError, match="Cannot parse"):
            MappingConfigSource.from_file(path)

    def test_non_mapping_file_raises(self, tmp_path: Path):
        path = tmp_path / "sinks.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigSourceError, match="must contain a mapping"):
            MappingConfigSource.from_file(path)


# ---------------------------------------------------------------------------
# Test: EnvConfigSource
# ---------------------------------------------------------------------------


class TestEnvConfigSource:
    def test_reads_prefixed_upper_case_keys(self):
        source = EnvConfigSource(environ={"ERRORLOGGER_SLACK_TOKEN": "abc"})
        assert source.get("slack_token") == "abc"
        assert source.get("slack_channel", "random") == "random"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False), ("", False)],
    )
    def test_boolean_switches_coerced(self, raw, expected):
        source = EnvConfigSource(environ={"ERRORLOGGER_SYSLOG_ENABLED": raw})
        assert source.get("syslog_enabled") is expected

    def test_unrecognized_boolean_returns_default(self):
        source = EnvConfigSource(environ={"ERRORLOGGER_SYSLOG_ENABLED": "maybe"})
        assert source.get("syslog_enabled", False) is False

    def test_custom_prefix(self):
        source = EnvConfigSource(prefix="APP_", environ={"APP_NEWRELIC_APPNAME": "shop"})
        assert source.get("newrelic_appname") == "shop"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ERRORLOGGER_NEWRELIC_APPNAME", "from-env")
        assert EnvConfigSource().get("newrelic_appname") == "from-env"


# ---------------------------------------------------------------------------
# Test: load_sink_config(s)
# ---------------------------------------------------------------------------


class TestLoadSinkConfigs:
    def test_loads_every_sink_type_in_order(self):
        configs = load_sink_configs(MappingConfigSource())
        assert list(configs) == list(SinkType)
        assert all(not config.enabled for config in configs.values())

    def test_chat_webhook_fields(self):
        source = MappingConfigSource(
            {
                "slack_enabled": True,
                "slack_token": "abc",
                "slack_channel": "alerts",
                "slack_attachment": True,
                "slack_level": 400,
            }
        )
        config = load_sink_config(source, SinkType.CHAT_WEBHOOK)
        assert config.enabled is True
        assert config.required_fields == frozenset({"token"})
        assert config.fields == {"token": "abc", "channel": "alerts", "attachment": True}
        assert config.min_level is Severity.ERROR

    def test_mail_debug_flag(self):
        source = MappingConfigSource(
            {"nativemailer_enabled": "1", "nativemailer_email": "ops@x.io", "nativemailer_debug": "true"}
        )
        config = load_sink_config(source, SinkType.NATIVE_MAIL)
        assert config.enabled is True
        assert config.debug is True

    def test_host_mail_uses_own_prefix(self):
        source = MappingConfigSource({"hostmailer_enabled": True, "hostmailer_email": "ops@x.io"})
        config = load_sink_config(source, SinkType.HOST_MAIL)
        assert config.fields["email"] == "ops@x.io"

    def test_invalid_level_falls_back_to_debug(self, caplog: pytest.LogCaptureFixture):
        source = MappingConfigSource({"syslog_level": "shouty"})
        config = load_sink_config(source, SinkType.SYSLOG)
        assert config.min_level is Severity.DEBUG
        assert "Ignoring invalid level" in caplog.text

    def test_missing_required_values_are_not_filled(self):
        source = MappingConfigSource({"syslog_enabled": True, "syslog_ident": "shop"})
        config = load_sink_config(source, SinkType.SYSLOG)
        assert config.missing_fields() == ["facility"]

    def test_env_source_end_to_end(self):
        source = EnvConfigSource(
            environ={
                "ERRORLOGGER_NEWRELIC_ENABLED": "yes",
                "ERRORLOGGER_NEWRELIC_APPNAME": "shop",
                "ERRORLOGGER_NEWRELIC_LEVEL": "warning",
            }
        )
        config = load_sink_config(source, SinkType.APM)
        assert config.enabled is True
        assert config.fields == {"appname": "shop"}
        assert config.min_level is Severity.WARNING
