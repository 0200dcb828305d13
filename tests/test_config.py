import json

from serpscope.config.loader import get_config_path, load_config, save_config
from serpscope.config.schema import Config


def test_config_defaults() -> None:
    config = Config()

    assert config.browser.default_browser == "chromium"
    assert config.browser.headless is True
    assert config.browser.navigation_timeout_ms == 30000
    assert config.browser.ready_timeout_ms == 10000
    assert config.browser.wait_until == "networkidle"
    assert "Chrome/120.0.0.0" in config.browser.user_agent
    assert config.search.base_url == "https://www.google.com/search"
    assert config.limits.inline_images == 20
    assert config.limits.images == 50
    assert config.limits.min_image_size == 100
    assert config.limits.scroll_cycles == 3
    assert config.limits.scroll_delay_ms == 1000


def test_config_roundtrip_with_camel_case(tmp_path) -> None:
    path = tmp_path / "config.json"
    config = Config()
    config.server.port = 9000
    config.limits.images = 10

    written = save_config(config, path)
    raw = json.loads(path.read_text(encoding="utf-8"))
    reloaded = load_config(path)

    assert written == path
    assert raw["browser"]["navigationTimeoutMs"] == 30000
    assert raw["limits"]["minImageSize"] == 100
    assert reloaded.server.port == 9000
    assert reloaded.limits.images == 10


def test_load_config_accepts_snake_case_keys(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"browser": {"ws_endpoint": "ws://browser:3000"}}), encoding="utf-8")

    assert load_config(path).browser.ws_endpoint == "ws://browser:3000"


def test_load_config_falls_back_to_defaults_on_invalid_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_config(path).server.port == 8787

    path.write_text(json.dumps({"limits": {"images": "many"}}), encoding="utf-8")
    assert load_config(path).limits.images == 50


def test_missing_config_file_uses_defaults(tmp_path) -> None:
    assert load_config(tmp_path / "absent.json") == Config()


def test_environment_overrides_defaults(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SERPSCOPE_BROWSER__HEADLESS", "false")
    monkeypatch.setenv("SERPSCOPE_SEARCH__LANGUAGE", "de")

    config = load_config(tmp_path / "absent.json")

    assert config.browser.headless is False
    assert config.search.language == "de"


def test_file_values_win_over_environment(monkeypatch, tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"browser": {"headless": True}}), encoding="utf-8")
    monkeypatch.setenv("SERPSCOPE_BROWSER__HEADLESS", "false")

    assert load_config(path).browser.headless is True


def test_file_and_environment_merge_per_field(monkeypatch, tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"browser": {"wsEndpoint": "ws://browser:3000"}}), encoding="utf-8")
    monkeypatch.setenv("SERPSCOPE_BROWSER__HEADLESS", "false")
    monkeypatch.setenv("SERPSCOPE_LIMITS__IMAGES", "10")

    config = load_config(path)

    assert config.browser.ws_endpoint == "ws://browser:3000"
    assert config.browser.headless is False
    assert config.limits.images == 10


def test_invalid_file_still_applies_environment(monkeypatch, tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(["not", "an", "object"]), encoding="utf-8")
    monkeypatch.setenv("SERPSCOPE_SEARCH__LANGUAGE", "fr")

    config = load_config(path)

    assert config.search.language == "fr"
    assert config.limits.images == 50


def test_config_path_from_environment(monkeypatch, tmp_path) -> None:
    path = tmp_path / "elsewhere.json"
    path.write_text(json.dumps({"server": {"port": 9100}}), encoding="utf-8")
    monkeypatch.setenv("SERPSCOPE_CONFIG", str(path))

    assert get_config_path() == path
    assert load_config().server.port == 9100


def test_default_config_path(monkeypatch) -> None:
    monkeypatch.delenv("SERPSCOPE_CONFIG", raising=False)

    assert get_config_path().parts[-2:] == (".serpscope", "config.json")
