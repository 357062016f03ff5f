# === FILE: site_spider/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SiteSpider через командную строку.

Команды:
  extract   Прогнать конвейер извлечения по архиву страниц и вывести/сохранить отчёт
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (в дополнение к stderr)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Команда extract опции:
  --base-url URL      Корневой URL архивированного сайта (override base_url)
  --limit INT         Макс. число страниц (override max_pages)
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)

Дополнительно:
  --version, -v       Показать версию SiteSpider

Пример:
  site-spider extract archive/example.com --base-url https://example.com --json report.json --pretty
"""
import sys
from pathlib import Path

import click

from site_spider import __version__
from site_spider.aggregator import collect_results
from site_spider.config import load_config
from site_spider.logger import init_logging
from site_spider.page.source import iter_archive_pages
from site_spider.pipeline import ExtractionPipeline
from site_spider.report.html_report import render_html
from site_spider.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteSpider, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
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
    help='Путь к файлу логов (консольный вывод идёт в stderr)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteSpider CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('extract', context_settings=CONTEXT_SETTINGS)
@click.argument('archive_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    '--base-url', '-b', 'base_url',
    default=None,
    help='Корневой URL архивированного сайта (override base_url)'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц для обработки (override max_pages)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с шаблоном report.html.j2 (по умолчанию встроенный)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def extract(ctx, archive_dir, base_url, limit, json_output, html_output, template_dir, pretty):
    """Прогнать извлечение по архиву страниц и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    overrides = {}
    if base_url is not None:
        overrides['base_url'] = base_url.rstrip('/')
    if limit is not None:
        overrides['max_pages'] = limit
    if overrides:
        cfg = cfg.model_validate({**cfg.model_dump(), **overrides})

    if cfg.base_url is None:
        print_error('Не задан base_url: укажите --base-url или base_url в конфиге')

    pages = iter_archive_pages(archive_dir, str(cfg.base_url))
    try:
        report = collect_results(ExtractionPipeline(pages, cfg))
    except Exception as e:
        print_error(f'Ошибка при извлечении: {e}')

    # Если не сохраняем в файл - печатаем в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
