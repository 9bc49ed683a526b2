import click
from .commands.scan import scan
from .commands.formats import formats
from .commands.guess import guess


@click.group()
@click.version_option(version="0.1.0", prog_name="logranges")
def cli():
    """logranges - find the time ranges in which log lines match a pattern"""
    pass

cli.add_command(scan)
cli.add_command(formats)
cli.add_command(guess)

if __name__ == "__main__":
    cli()
