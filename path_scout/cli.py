# === FILE: path_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска сканера PathScout через командную строку.

Команды:
  scan [URL]   Запустить сканирование и вывести/сохранить отчёты
  config       Показать итоговые настройки
  mangle NAME  Показать backup/swap-варианты имени файла

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --workers N         Число воркеров
  --ext EXT           Расширение для перебора (можно несколько раз)
  --no-mangle         Не проверять backup/swap-варианты
  --no-html           Не извлекать ссылки из HTML
  --sleep SEC         Пауза после каждого запроса
  --wordlist PATH     Словарь для перебора директорий
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном report.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего сканирования (секунд)

Пример:
  path_scout scan http://example.com/ --ext php --ext txt --wordlist words.txt --json report.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from path_scout import __version__
from path_scout.aggregator import aggregate_results
from path_scout.bruteforce.mangle import mangle
from path_scout.config import load_config
from path_scout.engine import start_scan
from path_scout.logger import init_logging
from path_scout.report.html_report import render_html
from path_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PathScout, version %(version)s')
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд PathScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


def _settings(ctx, overrides=None):
    try:
        return load_config(ctx.obj['config_path'], overrides)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--workers', '-w', type=int, default=None, help='Число воркеров')
@click.option('--ext', '-x', 'extensions', multiple=True, help='Расширение для перебора (можно несколько)')
@click.option('--no-mangle', 'no_mangle', is_flag=True, help='Не проверять backup/swap-варианты')
@click.option('--no-html', 'no_html', is_flag=True, help='Не извлекать ссылки из HTML')
@click.option('--sleep', 'sleep_time', type=float, default=None, help='Пауза после каждого запроса (секунд)')
@click.option(
    '--wordlist', 'wordlist',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Словарь для перебора директорий'
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
    help='Папка с Jinja2-шаблоном (по умолчанию встроенный)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--scan-timeout', 'scan_timeout', type=float, default=None, help='Таймаут всего сканирования (секунд)')
@click.pass_context
def scan(ctx, url, workers, extensions, no_mangle, no_html, sleep_time, wordlist,
         json_output, html_output, template_dir, pretty, scan_timeout):
    """Запустить сканирование и сгенерировать отчёты."""
    overrides = {
        'base_url': url,
        'workers': workers,
        'extensions': list(extensions) or None,
        'mangle': False if no_mangle else None,
        'parse_html': False if no_html else None,
        'sleep_time': sleep_time,
        'wordlist': wordlist,
    }
    cfg = _settings(ctx, overrides)
    try:
        if scan_timeout:
            results = asyncio.run(
                asyncio.wait_for(start_scan(cfg), timeout=scan_timeout)
            )
        else:
            results = asyncio.run(start_scan(cfg))
    except asyncio.TimeoutError:
        print_error(f'Сканирование не завершено за {scan_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при сканировании: {e}')

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=indent))
        return

    report = aggregate_results(results)

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать итоговые настройки в JSON."""
    cfg = _settings(ctx)
    click.echo(cfg.model_dump_json(indent=2))


@cli.command('mangle', context_settings=CONTEXT_SETTINGS)
@click.argument('name')
def show_mangle(name):
    """Показать backup/swap-варианты имени файла."""
    for candidate in mangle(name):
        click.echo(candidate)


if __name__ == "__main__":
    cli()
