import click
from ..decorators import handle_exceptions
from ..flags import cfg_lines_from_python_flags

@click.command()
@click.argument("python_flags")
@handle_exceptions
def flags(python_flags):
    """Rebuild py_sys_config cfg lines from a dependency's python_flags value.

    Meant for build steps that depend on a crate which already resolved
    python, e.g. with DEP_PYTHON3_PYTHON_FLAGS.
    """
    for line in cfg_lines_from_python_flags(python_flags):
        click.echo(line)
