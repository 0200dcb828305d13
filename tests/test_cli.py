import json

import pytest

from serpscope import cli
from serpscope.engine.browser import InstallResult
from serpscope.engine.models import SearchMode
from serpscope.errors import ExtractionError


@pytest.fixture(autouse=True)
def _keep_default_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda config: None)


def test_search_command_prints_envelope(monkeypatch, tmp_path, capsys) -> None:
    captured: dict = {}

    async def fake_run_search(config, mode, query):
        captured["mode"] = mode
        captured["query"] = query
        return {"success": True, "timestamp": "2026-01-01T00:00:00.000Z", "data": {"query": query}}

    monkeypatch.setattr(cli, "_run_search", fake_run_search)

    code = cli.main(["--config", str(tmp_path / "absent.json"), "search", "news", "markets"])

    assert code == 0
    assert captured == {"mode": SearchMode.NEWS, "query": "markets"}
    assert json.loads(capsys.readouterr().out)["data"] == {"query": "markets"}


def test_search_command_reports_extraction_error(monkeypatch, tmp_path, capsys) -> None:
    async def failing_run_search(config, mode, query):
        raise ExtractionError("Waiting for selector `#search` failed")

    monkeypatch.setattr(cli, "_run_search", failing_run_search)

    code = cli.main(["--config", str(tmp_path / "absent.json"), "search", "web", "openai"])

    assert code == 1
    assert json.loads(capsys.readouterr().out) == {"error": "Waiting for selector `#search` failed"}


def test_search_command_rejects_blank_query(tmp_path, capsys) -> None:
    code = cli.main(["--config", str(tmp_path / "absent.json"), "search", "web", "   "])

    assert code == 2
    assert "error" in json.loads(capsys.readouterr().out)


def test_install_browsers_command(monkeypatch, tmp_path, capsys) -> None:
    calls: list[str] = []

    async def fake_install(config):
        calls.append(config.default_browser)
        return InstallResult(config.default_browser, True, "installed")

    monkeypatch.setattr(cli, "install_browser", fake_install)

    code = cli.main(["--config", str(tmp_path / "absent.json"), "install-browsers"])

    assert code == 0
    assert calls == ["chromium"]
    assert "installed" in capsys.readouterr().out


def test_install_browsers_failure_exit_code(monkeypatch, tmp_path) -> None:
    async def fake_install(config):
        return InstallResult(config.default_browser, False, "timed out")

    monkeypatch.setattr(cli, "install_browser", fake_install)

    assert cli.main(["--config", str(tmp_path / "absent.json"), "install-browsers"]) == 1


@pytest.mark.parametrize("position", ["before", "after"])
def test_config_option_accepted_around_subcommand(monkeypatch, tmp_path, position: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"browser": {"defaultBrowser": "firefox"}}), encoding="utf-8")
    calls: list[str] = []

    async def fake_install(config):
        calls.append(config.default_browser)
        return InstallResult(config.default_browser, True, "installed")

    monkeypatch.setattr(cli, "install_browser", fake_install)
    argv = ["--config", str(path), "install-browsers"]
    if position == "after":
        argv = ["install-browsers", "--config", str(path)]

    assert cli.main(argv) == 0
    assert calls == ["firefox"]
