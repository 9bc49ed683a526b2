from pathlib import Path

import click

from logranges.collector.source import LineSource
from logranges.config.loader import load_config
from logranges.config.schema import LogRangesConfig, PatternConfig
from logranges.errors import LogRangesError
from logranges.main import RangeScanner
from logranges.reporter import Reporter, should_preview
from logranges.utils.logging import setup_logging
from ..console import console, fail

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def apply_options(config: LogRangesConfig, patterns, date_format, live, log_level) -> LogRangesConfig:
    """Command-line options win over the config file; given patterns replace configured ones."""
    if patterns:
        config.patterns = [PatternConfig(pattern=p) for p in patterns]
    if date_format:
        config.scan.format = date_format
    if live is not None:
        config.scan.live = live
    if log_level:
        config.logging.level = log_level
    return config


@click.command()
@click.argument("file", required=False, type=click.Path(dir_okay=False, allow_dash=True))
@click.option("--pattern", "-p", "patterns", multiple=True,
              help="Regex to look for; repeat for several, earlier ones win")
@click.option("--format", "-f", "date_format", default=None,
              help="strftime-like date format, e.g. '%Y-%m-%d %T %z' (guessed if omitted)")
@click.option("--config", "config_path", default=None,
              type=click.Path(dir_okay=False, path_type=Path), help="YAML config file")
@click.option("--live/--no-live", default=None,
              help="Show the open range while reading (default: when piped into a terminal)")
@click.option("--log-level", default=None, type=click.Choice(LOG_LEVELS, case_sensitive=False))
def scan(file, patterns, date_format, config_path, live, log_level):
    """Report the time ranges in which lines of FILE (or stdin) match the patterns."""
    try:
        config = apply_options(load_config(config_path), patterns, date_format, live, log_level)
        log_file = Path(config.logging.file) if config.logging.file else None
        setup_logging(config.logging.level, log_file)

        scanner = RangeScanner.from_config(config)
        source = LineSource(file)
        if config.scan.live is None:
            preview = should_preview(source.is_stdin)
        else:
            preview = config.scan.live

        with source, Reporter(scanner.patterns, console=console, live=preview) as reporter:
            scanner.run(source, reporter)
    except (LogRangesError, OSError) as e:
        fail(e)
