import click

from logranges.collector.source import LineSource
from logranges.config.defaults import DEFAULT_GUESS_ATTEMPTS
from logranges.dateformat.guesser import guess_entry
from logranges.errors import GuessExhausted
from ..console import console, fail


@click.command()
@click.argument("file", required=False, type=click.Path(dir_okay=False, allow_dash=True))
@click.option("--attempts", "-n", default=DEFAULT_GUESS_ATTEMPTS, type=click.IntRange(min=1),
              help="Lines to try before giving up")
def guess(file, attempts):
    """Show which known date format FILE (or stdin) uses."""
    try:
        with LineSource(file) as source:
            entry = guess_entry(source, attempts)
        if entry is None:
            raise GuessExhausted(attempts)
    except (GuessExhausted, OSError) as e:
        fail(e)

    console.print(f"{entry.name}: {entry.spec.pattern}", markup=False, highlight=False, emoji=False)
