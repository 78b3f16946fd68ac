import click
import os
from ..cli_logger import logger
from ..config import load_build_request
from ..decorators import handle_exceptions
from ..errors import ResolverError
from ..interpreter import get_config_from_interpreter
from ..resolver import Resolver
from ..version import matches

@click.command()
@click.option("--python-version", "version", default=None, help="Requested python version, e.g. 3 or 3.8.")
@click.pass_context
@handle_exceptions
def doctor(ctx, version):
    """Probe every candidate interpreter name and report what was found."""
    request = load_build_request(ctx.obj["path"], os.environ, {"version": version})
    resolver = Resolver()
    logger.info(f"Checking interpreters for python {request.version} on {resolver.platform.name}...")

    names = resolver.locator.candidate_names(request.version)
    if request.executable:
        names = [request.executable]
    found = False
    for name in names:
        try:
            executable, found_version, _ = get_config_from_interpreter(name, resolver.runner)
        except ResolverError as e:
            logger.warning(f"{name}: {e}")
            continue
        if matches(request.version, found_version):
            found = True
            logger.success(f"{name}: python {found_version} at {executable}")
        else:
            logger.warning(f"{name}: python {found_version} at {executable} does not match {request.version}")

    if found:
        logger.success("A matching interpreter is available.")
    else:
        logger.error(f"No interpreter matches python {request.version}.")
