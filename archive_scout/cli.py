# === FILE: archive_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа ArchiveScout для командной строки.

Команды:
  crawl DOMAIN  Обойти включённые веб-архивы и вывести найденные поддомены (JSON)
  sources       Показать включённые источники
  config        Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --hint TEXT         Подсказка для стартового URL (по умолчанию домен)
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего сканирования (секунд)

Пример:
  archive-scout --config configs/default.yaml crawl example.com --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from archive_scout import __version__
from archive_scout.config import load_config
from archive_scout.logger import init_logging
from archive_scout.scanner import start_scan
from archive_scout.sources import enabled_sources

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="ArchiveScout, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default="configs/default.yaml",
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML/JSON.",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (stderr, если не указан)",
)
@click.option(
    "--log-format", "log_format",
    default="%(asctime)s %(levelname)s %(message)s",
    show_default=True,
    help="Строка формата для логов",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд ArchiveScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("crawl", context_settings=CONTEXT_SETTINGS)
@click.argument("domain")
@click.option("--hint", default=None, help="Подсказка для стартового URL (по умолчанию домен)")
@click.option("--pretty", is_flag=True, help="Преформатировать JSON-вывод (отступ 2)")
@click.option(
    "--scan-timeout", "scan_timeout",
    type=float,
    default=None,
    help="Таймаут всего сканирования (секунд)",
)
@click.pass_context
def crawl(ctx, domain, hint, pretty, scan_timeout):
    """Обойти веб-архивы и вывести найденные поддомены DOMAIN."""
    cfg = ctx.obj["config"]
    try:
        if scan_timeout:
            results = asyncio.run(
                asyncio.wait_for(start_scan(cfg, domain, hint), timeout=scan_timeout)
            )
        else:
            results = asyncio.run(start_scan(cfg, domain, hint))
    except asyncio.TimeoutError:
        print_error(f"Сканирование не завершено за {scan_timeout} секунд")
    except Exception as e:
        print_error(f"Ошибка при сканировании: {e}")

    indent = 2 if pretty else None
    click.echo(json.dumps(results, ensure_ascii=False, indent=indent))


@cli.command("sources", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_sources(ctx):
    """Показать источники, включённые фильтром из конфигурации."""
    for source in enabled_sources(ctx.obj["config"]):
        click.echo(source.name)


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
