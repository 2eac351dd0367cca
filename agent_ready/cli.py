# === FILE: agent_ready/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера AgentReady через командную строку.

Команды:
  crawl     Обойти сайт и вывести/сохранить пары (url, html)
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  URL                 Корневой URL (перекрывает base_url из конфига)
  --max-depth INT     Максимальная глубина обхода по ссылкам
  --concurrency INT   Число одновременных запросов
  --sitemap/--no-sitemap  Использовать sitemap.xml
  --include GLOB      Разрешённые пути (можно повторять)
  --exclude GLOB      Запрещённые пути (можно повторять)
  --json PATH         Сохранить страницы в JSON-файл
  --html PATH         Сохранить HTML-сводку обхода
  --template DIR      Папка со своим шаблоном crawl_report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --crawl-timeout SEC Таймаут всего обхода (секунд)

Пример:
  agent-ready crawl https://example.com --include '/docs/**' --json pages.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click

from agent_ready import __version__
from agent_ready.config import CrawlConfig, read_config_data
from agent_ready.logger import init_logging
from agent_ready.report.html_report import render_html
from agent_ready.report.json_report import render_json
from agent_ready.scanner import crawl_site

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def build_config(config_path: Optional[Path], overrides: Dict[str, Any]) -> CrawlConfig:
    """Накладывает опции командной строки поверх файла конфигурации."""
    data: Dict[str, Any] = read_config_data(config_path) if config_path else {}
    for key, value in overrides.items():
        if value is None or value == ():
            continue
        alias = CrawlConfig.model_fields[key].alias
        if alias:
            data.pop(alias, None)
        data[key] = list(value) if isinstance(value, tuple) else value
    if 'base_url' not in data and 'url' not in data:
        raise ValueError('не указан URL: передайте его аргументом или задайте base_url в конфиге')
    return CrawlConfig.model_validate(data)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='AgentReady, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд AgentReady CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--max-depth', 'max_depth', type=int, default=None, help='Максимальная глубина обхода ссылок')
@click.option('--concurrency', type=int, default=None, help='Число одновременных запросов')
@click.option('--sitemap/--no-sitemap', default=None, help='Искать sitemap.xml перед обходом по ссылкам')
@click.option('--include', multiple=True, help='Glob разрешённых путей (можно повторять)')
@click.option('--exclude', multiple=True, help='Glob запрещённых путей (можно повторять)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить страницы в JSON-файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-сводку обхода'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка со своим шаблоном crawl_report.html.j2'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Таймаут всего обхода (секунд)'
)
@click.pass_context
def crawl(ctx, url, max_depth, concurrency, sitemap, include, exclude,
          json_output, html_output, template_dir, pretty, crawl_timeout):
    """Обойти сайт и сохранить найденные страницы."""
    overrides = {
        'base_url': url,
        'max_depth': max_depth,
        'concurrency': concurrency,
        'sitemap': sitemap,
        'include': include,
        'exclude': exclude,
    }
    try:
        cfg = build_config(ctx.obj['config_path'], overrides)
    except (ValueError, TypeError, FileNotFoundError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    try:
        if crawl_timeout:
            report = asyncio.run(
                asyncio.wait_for(crawl_site(cfg), timeout=crawl_timeout)
            )
        else:
            report = asyncio.run(crawl_site(cfg))
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')

    if not report.pages:
        print_error(f'Не удалось загрузить ни одной страницы с {cfg.base_url}')

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps(report.records(), ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON: {saved_json} ({len(report.pages)} pages)')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}')
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    try:
        cfg = build_config(ctx.obj['config_path'], {'base_url': url})
    except (ValueError, TypeError, FileNotFoundError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
