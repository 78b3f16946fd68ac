import functools
import click
import sys # Import sys for sys.exc_info()
from .cli_logger import logger
from .errors import ResolverError

def handle_exceptions(func):
    """A decorator to handle common exceptions for CLI commands.

    Any failure aborts the build: the error is logged and the process exits
    with status 1.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except click.Abort:
            logger.warning("\nCommand aborted by user.")
        except ResolverError as e:
            logger.error(str(e))
            logger.traceback(*sys.exc_info()) # only shown with --verbose
        except click.ClickException as e:
            logger.error(f"CLI Error: {e}")
            logger.traceback(*sys.exc_info())
        except Exception:
            logger.exception(*sys.exc_info())
        sys.exit(1)
    return wrapper
