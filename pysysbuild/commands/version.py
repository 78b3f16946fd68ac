import click
import importlib.metadata
from ..decorators import handle_exceptions

@click.command()
@handle_exceptions
def version():
    """Print the version of the pysysbuild tool."""
    try:
        ver = importlib.metadata.version("pysysbuild")
    except importlib.metadata.PackageNotFoundError:
        raise click.ClickException("Could not determine the version of pysysbuild. Is it installed correctly?")
    click.echo(f"pysysbuild {ver}")
