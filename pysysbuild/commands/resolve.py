import click
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..link_planner import LinkRequest
from ..resolver import resolve_from_environment

@click.command()
@click.option("--python-version", "version", default=None, help="Requested python version, e.g. 3 or 3.8.")
@click.option("--executable", default=None, help="Use this interpreter instead of searching PATH.")
@click.option("--link-mode", type=click.Choice([mode.value for mode in LinkRequest]), default=None,
              help="How libpython should be linked.")
@click.option("--extension-module", is_flag=True, help="Build a module loaded by python itself.")
@click.option("--limited-api", is_flag=True, help="Emit the Py_LIMITED_API cfg.")
@click.pass_context
@handle_exceptions
def resolve(ctx, version, executable, link_mode, extension_module, limited_api):
    """Resolve the python interpreter and print the cargo directives."""
    overrides = {
        "version": version,
        "executable": executable,
        "link_mode": link_mode,
        "extension_module": extension_module or None,
        "limited_api": limited_api or None,
    }
    output = resolve_from_environment(path=ctx.obj["path"], overrides=overrides)
    # Printed only once everything resolved, a failed run leaves stdout empty.
    for line in output.lines():
        click.echo(line)
    logger.debug(f"Emitted {len(output.lines())} directives.")
