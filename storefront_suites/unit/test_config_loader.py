import pytest
import yaml

from storefront_suites.api_testing.framework.config_loader import ConfigLoader, ConfigurationError


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"api": {"base_url": "http://example.com"}, "timeouts": {"request": 5000}}),
        encoding="utf-8",
    )

    for name in ("API_BASE_URL", "TIMEOUTS_REQUEST", "TIMEOUTS_PAGE_LOAD"):
        monkeypatch.delenv(name, raising=False)

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.base_url") == "http://example.com"
    assert loader.get("timeouts.request") == 5000
    # Built-in default when the YAML is silent
    assert loader.get("timeouts.page_load") == 30000
    assert loader.get("retries.missing", 3) == 3

    ConfigLoader.reset()
    monkeypatch.setenv("API_BASE_URL", "http://env.example.com")
    monkeypatch.setenv("TIMEOUTS_DEFAULT_COMMAND", "2500")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("api.base_url") == "http://env.example.com"
    assert loader.get("timeouts.default_command") == 2500
    ConfigLoader.reset()


def test_reload_updates_values(monkeypatch, tmp_path):
    monkeypatch.delenv("TIMEOUTS_REQUEST", raising=False)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"timeouts": {"request": 5}}), encoding="utf-8")

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("timeouts.request") == 5

    config_path.write_text(yaml.dump({"timeouts": {"request": 15}}), encoding="utf-8")
    loader.reload()
    assert loader.get("timeouts.request") == 15
    ConfigLoader.reset()


def test_settings_snapshot(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({
            "ui": {"base_url": "https://shop.example.com/"},
            "retries": {"run_mode": 4, "open_mode": 1},
            "viewport": {"width": 1024},
        }),
        encoding="utf-8",
    )
    for name in ("UI_BASE_URL", "API_BASE_URL", "RETRIES_RUN_MODE"):
        monkeypatch.delenv(name, raising=False)

    ConfigLoader.reset()
    settings = ConfigLoader(config_path=config_path).settings
    ConfigLoader.reset()

    assert settings.base_url == "https://shop.example.com"
    assert settings.api_base_url == "https://automationexercise.com/api"
    assert settings.default_command_timeout == 10000
    assert settings.page_load_timeout == 30000
    assert settings.viewport == {"width": 1024, "height": 720}
    assert settings.retries_for(interactive=False) == 4
    assert settings.retries_for(interactive=True) == 1


def test_missing_file_falls_back_to_defaults(tmp_path):
    ConfigLoader.reset()
    loader = ConfigLoader(config_path=tmp_path / "absent.yaml")
    assert loader.get_section("ui") == {"base_url": "https://automationexercise.com"}
    assert loader.get_section("unknown") == {}
    assert loader.settings.request_timeout == 10000
    ConfigLoader.reset()


def test_section_overlays_yaml_on_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"timeouts": {"request": 2000}}), encoding="utf-8")

    ConfigLoader.reset()
    section = ConfigLoader(config_path=config_path).get_section("timeouts")
    ConfigLoader.reset()

    assert section["request"] == 2000
    assert section["page_load"] == 30000


def test_invalid_yaml_raises(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("ui: [unclosed", encoding="utf-8")

    ConfigLoader.reset()
    try:
        with pytest.raises(ConfigurationError):
            ConfigLoader(config_path=config_path)
    finally:
        ConfigLoader.reset()
