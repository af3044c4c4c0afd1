from statpanel.config.runtime_config import (
    DEFAULT_PLUGIN_VERSION,
    build_runtime_config,
    get_runtime_config,
)
from statpanel.version import __version__, get_version


def test_defaults_without_env():
    cfg = build_runtime_config()
    assert cfg.default_plugin_version == DEFAULT_PLUGIN_VERSION == "7"
    assert cfg.strict_inputs is False
    assert cfg.validate_mode == "warn"
    assert cfg.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("STATPANEL_PLUGIN_VERSION", " 6.7 ")
    monkeypatch.setenv("STATPANEL_STRICT_INPUTS", "On")
    monkeypatch.setenv("STATPANEL_VALIDATE", "STRICT")
    monkeypatch.setenv("STATPANEL_LOG_LEVEL", "debug")
    cfg = build_runtime_config()
    assert cfg.default_plugin_version == "6.7"
    assert cfg.strict_inputs is True
    assert cfg.validate_mode == "strict"
    assert cfg.log_level == "DEBUG"


def test_blank_and_unknown_values_fall_back(monkeypatch):
    monkeypatch.setenv("STATPANEL_PLUGIN_VERSION", "   ")
    monkeypatch.setenv("STATPANEL_STRICT_INPUTS", "maybe")
    monkeypatch.setenv("STATPANEL_VALIDATE", "loud")
    cfg = build_runtime_config()
    assert cfg.default_plugin_version == "7"
    assert cfg.strict_inputs is False
    assert cfg.validate_mode == "warn"


def test_singleton_refresh(monkeypatch):
    first = get_runtime_config()
    assert get_runtime_config() is first
    monkeypatch.setenv("STATPANEL_VALIDATE", "off")
    assert get_runtime_config().validate_mode == "warn"
    assert get_runtime_config(refresh=True).validate_mode == "off"


def test_version_env_override(monkeypatch):
    assert get_version() == __version__
    monkeypatch.setenv("STATPANEL_VERSION", "9.9.9")
    assert get_version() == "9.9.9"
