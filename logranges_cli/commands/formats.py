import click
from rich.table import Table

from logranges.dateformat.library import KNOWN_FORMATS
from ..console import console


@click.command()
def formats():
    """List the date formats that can be guessed, in priority order."""
    table = Table(title="Known Date Formats")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Format")
    table.add_column("Example", style="dim")
    table.add_column("Strategy")
    table.add_column("Description")

    for entry in KNOWN_FORMATS:
        table.add_row(
            entry.name,
            entry.spec.pattern,
            entry.example,
            entry.spec.strategy.value,
            entry.description,
        )

    console.print(table)
