import json

import pytest

from pulsar_operator.core.config.settings import OperatorSettings, load_settings


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for key in ("CONFIG_FILE", "ENV", "HOST", "PORT", "LOG_LEVEL", "METRICS_ENABLED"):
        monkeypatch.delenv("PULSAR_OPERATOR_" + key, raising=False)


def test_defaults_without_file_or_env():
    assert load_settings() == OperatorSettings()


def test_load_yaml_file(tmp_path):
    f = tmp_path / "operator.yaml"
    f.write_text("env: PROD\nport: 9090\nlog_level: debug\nmetrics_enabled: false\n", encoding="utf-8")
    s = load_settings(f)
    assert s.env == "prod"
    assert s.port == 9090
    assert s.log_level == "DEBUG"
    assert s.metrics_enabled is False


def test_load_json_file(tmp_path):
    f = tmp_path / "operator.json"
    f.write_text(json.dumps({"host": "127.0.0.1"}), encoding="utf-8")
    assert load_settings(f).host == "127.0.0.1"


def test_missing_file_falls_back_to_defaults(tmp_path, caplog):
    s = load_settings(tmp_path / "nope.yaml")
    assert s == OperatorSettings()
    assert "does not exist" in caplog.text


def test_malformed_file_falls_back_to_defaults(tmp_path):
    f = tmp_path / "bad.yaml"
    f.write_text("this: is: not: valid: yaml:\n  {{{{", encoding="utf-8")
    assert load_settings(f) == OperatorSettings()


def test_non_mapping_file_falls_back_to_defaults(tmp_path):
    f = tmp_path / "list.json"
    f.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
    assert load_settings(f) == OperatorSettings()


def test_invalid_values_are_skipped(tmp_path, caplog):
    f = tmp_path / "operator.yaml"
    f.write_text("port: 70000\nlog_level: chatty\nhost: 10.0.0.1\nunknown_key: 1\n", encoding="utf-8")
    s = load_settings(f)
    assert s.port == 8081
    assert s.log_level == "INFO"
    assert s.host == "10.0.0.1"
    assert "unknown_key" in caplog.text


def test_env_overrides_file(tmp_path, monkeypatch):
    f = tmp_path / "operator.yaml"
    f.write_text("port: 9090\n", encoding="utf-8")
    monkeypatch.setenv("PULSAR_OPERATOR_CONFIG_FILE", str(f))
    monkeypatch.setenv("PULSAR_OPERATOR_PORT", "9191")
    monkeypatch.setenv("PULSAR_OPERATOR_METRICS_ENABLED", "false")

    s = load_settings()
    assert s.port == 9191
    assert s.metrics_enabled is False
