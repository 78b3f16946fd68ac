import click
import os
from ..cli_logger import logger
from ..config import load_build_request
from ..decorators import handle_exceptions
from ..resolver import Resolver

@click.command()
@click.option("--python-version", "version", default=None, help="Requested python version, e.g. 3 or 3.8.")
@click.option("--executable", default=None, help="Use this interpreter instead of searching PATH.")
@click.pass_context
@handle_exceptions
def find(ctx, version, executable):
    """Locate the python interpreter without emitting any directives."""
    request = load_build_request(
        ctx.obj["path"], os.environ, {"version": version, "executable": executable}
    )
    interpreter = Resolver().find_interpreter(request)
    logger.step_info(f"libdir:        {interpreter.libdir}", indent=2)
    logger.step_info(f"enable_shared: {interpreter.enable_shared}", indent=2)
    logger.step_info(f"ld_version:    {interpreter.ld_version}", indent=2)
    logger.step_info(f"exec_prefix:   {interpreter.exec_prefix}", indent=2)
    click.echo(f"{interpreter.version} {interpreter.executable}")
