# === FILE: sitemap_check/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SitemapCheck через командную строку.

Разворачивает sitemap (включая вложенные sitemap-индексы) в список страниц
и проверяет HEAD-запросом, что каждая страница отдаётся с Content-Type
``text/markdown``.

Опции:
  --config PATH        Путь к YAML/JSON-конфигу
  --batch-size INT     Число одновременно проверяемых URL (default: 10)
  --timeout SEC        Таймаут одного запроса
  --user-agent TEXT    Заголовок User-Agent
  --content-type TEXT  Ожидаемый префикс Content-Type
  --json PATH          Сохранить JSON-отчёт в файл
  --html PATH          Сохранить HTML-отчёт в файл
  --template DIR       Папка с Jinja2-шаблоном report.html.j2
  --list-urls          Только вывести найденные URL, без проверки
  --log-level LEVEL    Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH      Файл для логов

Коды выхода: 0 — все URL прошли проверку, 1 — есть ошибки, фатальная
ошибка sitemap или не указан URL.

Пример:
  sitemap-check https://example.com/sitemap.xml --batch-size 20 --json report.json
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from sitemap_check import __version__
from sitemap_check.config import CheckerConfig, load_config
from sitemap_check.engine import start_check, start_resolve
from sitemap_check.exceptions import SitemapError
from sitemap_check.logger import DEFAULT_FORMAT, configure
from sitemap_check.report import format_progress, format_summary, render_html, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _build_config(config_path, **overrides) -> CheckerConfig:
    cfg = load_config(config_path)
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return cfg
    return CheckerConfig(**{**cfg.model_dump(), **overrides})


def _echo_progress(result, current, total):
    click.echo(format_progress(result, current, total), nl=False)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapCheck, version %(version)s')
@click.argument('sitemap_url', required=False)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option('--batch-size', '-b', 'batch_size', type=int, default=None, help='Число URL, проверяемых одновременно.')
@click.option('--timeout', 'timeout', type=float, default=None, help='Таймаут одного запроса (секунд).')
@click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent.')
@click.option('--content-type', 'content_type', default=None, help='Ожидаемый префикс Content-Type.')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном report.html.j2 (по умолчанию встроенный)'
)
@click.option('--list-urls', 'list_urls', is_flag=True, help='Только вывести найденные URL, без проверки.')
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.pass_context
def cli(ctx, sitemap_url, config_path, batch_size, timeout, user_agent, content_type,
        json_output, html_output, template_dir, list_urls, log_level, log_file):
    """Проверить, что все страницы из SITEMAP_URL отдаются как text/markdown."""
    if not sitemap_url:
        click.echo(ctx.get_usage(), err=True)
        click.echo("\nExample:\n  sitemap-check https://example.com/sitemap.xml", err=True)
        ctx.exit(1)

    try:
        cfg = _build_config(
            config_path,
            batch_size=batch_size,
            timeout=timeout,
            user_agent=user_agent,
            expected_content_type=content_type,
        )
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    log = configure(level=log_level, log_file=log_file, log_format=DEFAULT_FORMAT)
    log.info('Config: batch_size=%d timeout=%.1fs user_agent=%r', cfg.batch_size, cfg.timeout, cfg.user_agent)

    if list_urls:
        try:
            urls = asyncio.run(start_resolve(cfg, sitemap_url))
        except SitemapError as e:
            print_error(str(e))
        for url in urls:
            click.echo(url)
        return

    click.echo(f'Validating sitemap: {sitemap_url}')
    try:
        summary = asyncio.run(start_check(cfg, sitemap_url, _echo_progress))
    except SitemapError as e:
        print_error(f'\nValidation failed: {e}')

    if summary.total:
        click.echo()
    click.echo()
    click.echo(format_summary(summary, cfg.expected_content_type))

    if json_output:
        try:
            click.echo(f'JSON report: {render_json(summary, json_output)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            click.echo(f'HTML report: {render_html(summary, template_dir, html_output)}')
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    ctx.exit(0 if summary.ok else 1)


if __name__ == "__main__":
    cli()
