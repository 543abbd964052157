# File: tests/test_cli.py
"""Тесты для CLI (`sitemap_check.cli`) с использованием click.testing.CliRunner.
Проверяют коды выхода, вывод прогресса и сводки, отчёты и обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner

from sitemap_check.aggregator import summarize
from sitemap_check.cli import cli
from sitemap_check.crawler.models import ValidationResult
from sitemap_check.exceptions import FetchError
from sitemap_check.logger import LOGGER_NAME, configure

# The package re-exports the click command as `sitemap_check.cli`, shadowing the submodule.
cli_module = importlib.import_module("sitemap_check.cli")

SITEMAP = "https://example.com/sitemap.xml"

OK = ValidationResult("https://example.com/a", True, "text/markdown")
BAD = ValidationResult("https://example.com/b", False, "text/html")


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI переустанавливает обработчики на потоки CliRunner; после теста возвращаем обычные."""
    yield
    configure()


@pytest.fixture()
def fake_check(monkeypatch):
    """Патчим start_check: отдаёт заданные результаты и вызывает колбэк прогресса."""
    calls = {}

    def install(results):
        async def fake(cfg, sitemap_url, on_progress=None):
            calls["config"] = cfg
            calls["url"] = sitemap_url
            for i, r in enumerate(results, start=1):
                if on_progress:
                    on_progress(r, i, len(results))
            return summarize(results)

        monkeypatch.setattr(cli_module, "start_check", fake)
        return calls

    return install


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SitemapCheck" in result.output


def test_missing_url_prints_usage():
    result = CliRunner().invoke(cli, [])
    assert result.exit_code == 1
    assert "Usage:" in result.output


def test_all_ok_exit_zero(fake_check):
    calls = fake_check([OK])
    result = CliRunner().invoke(cli, [SITEMAP])
    assert result.exit_code == 0, result.output
    assert calls["url"] == SITEMAP
    assert "\r[1/1] OK" in result.output
    assert "Total URLs: 1" in result.output
    assert "Failed: 0" in result.output
    assert "Failed URLs" not in result.output


def test_failures_exit_one_and_are_listed(fake_check):
    fake_check([OK, BAD])
    result = CliRunner().invoke(cli, [SITEMAP])
    assert result.exit_code == 1
    assert "\r[2/2] FAIL https://example.com/b" in result.output
    assert "Failed: 1" in result.output
    assert "URL: https://example.com/b\nContent-Type: text/html" in result.output


def test_options_override_config(fake_check, tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("batch_size: 4\nuser_agent: FromFile/1.0\n", encoding="utf-8")
    calls = fake_check([OK])

    result = CliRunner().invoke(cli, [SITEMAP, "--config", str(cfg_file), "--batch-size", "2", "--timeout", "5"])

    assert result.exit_code == 0, result.output
    cfg = calls["config"]
    assert cfg.batch_size == 2
    assert cfg.timeout == 5.0
    assert cfg.user_agent == "FromFile/1.0"


def test_invalid_option_value(fake_check):
    fake_check([OK])
    result = CliRunner().invoke(cli, [SITEMAP, "--batch-size", "0"])
    assert result.exit_code == 1
    assert "конфигурации" in result.output


def test_fatal_error(monkeypatch):
    async def broken(cfg, sitemap_url, on_progress=None):
        raise FetchError(sitemap_url, status=404, reason="Not Found")

    monkeypatch.setattr(cli_module, "start_check", broken)
    result = CliRunner().invoke(cli, [SITEMAP])
    assert result.exit_code == 1
    assert "HTTP 404" in result.output
    assert "Total URLs" not in result.output


def test_list_urls(monkeypatch):
    async def resolve(cfg, sitemap_url):
        return ["https://example.com/a", "https://example.com/b"]

    async def must_not_run(*args, **kwargs):
        raise AssertionError("validation must not run")

    monkeypatch.setattr(cli_module, "start_resolve", resolve)
    monkeypatch.setattr(cli_module, "start_check", must_not_run)
    result = CliRunner().invoke(cli, [SITEMAP, "--list-urls"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["https://example.com/a", "https://example.com/b"]


def test_json_and_html_reports(fake_check, tmp_path):
    fake_check([OK, BAD])
    out_json = tmp_path / "report.json"
    out_html = tmp_path / "report.html"
    result = CliRunner().invoke(cli, [SITEMAP, "--json", str(out_json), "--html", str(out_html)])

    assert result.exit_code == 1
    data = json.loads(out_json.read_text(encoding="utf-8"))
    assert data["failed"] == 1
    assert [r["url"] for r in data["results"]] == [OK.url, BAD.url]
    assert "https://example.com/b" in out_html.read_text(encoding="utf-8")
    assert f"JSON report: {out_json}" in result.output


def test_log_file_receives_config_line(fake_check, tmp_path):
    fake_check([OK])
    log_file = tmp_path / "check.log"
    result = CliRunner().invoke(
        cli, [SITEMAP, "--batch-size", "7", "--log-level", "INFO", "--log-file", str(log_file)]
    )
    assert result.exit_code == 0, result.output
    content = log_file.read_text(encoding="utf-8")
    assert f"| {LOGGER_NAME} |" in content
    assert "batch_size=7" in content
