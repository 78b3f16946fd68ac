import click
import json
from .. import config as config_module
from ..decorators import handle_exceptions

@click.group()
@click.pass_context
def config(ctx):
    """Inspect the pysysbuild.toml configuration."""
    pass

@config.command()
@click.pass_context
@handle_exceptions
def show(ctx):
    """Print the effective build request as JSON."""
    request = config_module.load_build_request(path=ctx.obj["path"])
    click.echo(json.dumps(request.to_dict(), indent=4))

@config.command()
@click.pass_context
@handle_exceptions
def view(ctx):
    """Print the raw contents of pysysbuild.toml."""
    conf = config_module.load_config(path=ctx.obj["path"])
    if not conf:
        raise click.ClickException(f"No {config_module.CONFIG_FILE} found in {ctx.obj['path']}")
    click.echo(json.dumps(conf, indent=4))
