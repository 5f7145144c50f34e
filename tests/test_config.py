import logging

from dcplanner.config import AppConfig, load_config


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DCPLANNER_DATA_DIR", "/tmp/plans")
    monkeypatch.setenv("DCPLANNER_LOG_LEVEL", "debug")
    monkeypatch.setenv("DCPLANNER_PORT", "9100")
    monkeypatch.setenv("DCPLANNER_DEBUG", "yes")

    cfg = load_config()

    assert cfg == AppConfig(data_dir="/tmp/plans", log_level="DEBUG", port=9100, debug=True)
    assert cfg.settings_path.endswith("settings.json")


def test_malformed_port_falls_back_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("DCPLANNER_PORT", "80a0")

    with caplog.at_level(logging.WARNING, logger="dcplanner.config"):
        cfg = load_config()

    assert cfg.port == 8000
    assert "DCPLANNER_PORT" in caplog.text


def test_unset_port_uses_default_quietly(monkeypatch, caplog):
    monkeypatch.delenv("DCPLANNER_PORT", raising=False)

    with caplog.at_level(logging.WARNING, logger="dcplanner.config"):
        cfg = load_config()

    assert cfg.port == 8000
    assert caplog.text == ""
