import click
import os
from .cli_logger import LOG_DIR_ENV, logger
from .commands.config import config
from .commands.doctor import doctor
from .commands.find import find
from .commands.flags import flags
from .commands.resolve import resolve
from .commands.version import version
from .config import log_dir_from_config
from .decorators import handle_exceptions


@click.group()
@click.option("--path", "-p", default=".", help="Path to the project directory.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output on stderr.")
@click.pass_context
@handle_exceptions
def cli(ctx, path, verbose):
    """pysysbuild: resolve a python interpreter's build configuration."""
    ctx.obj = {"path": path}
    if verbose:
        logger.verbose = True
    if not os.environ.get(LOG_DIR_ENV):
        log_dir = log_dir_from_config(path)
        if log_dir:
            logger.set_log_dir(os.path.join(path, log_dir))

cli.add_command(resolve)
cli.add_command(find)
cli.add_command(flags)
cli.add_command(doctor)
cli.add_command(config)
cli.add_command(version)

if __name__ == '__main__':
    cli()
