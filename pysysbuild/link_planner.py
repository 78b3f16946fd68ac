"""Decides which libpython to link and where to search for it."""

import enum
from typing import List

from .cli_logger import logger
from .directives import link_search
from .interpreter import ResolvedInterpreter, ScriptRunner
from .utils.platform_resolver import PlatformResolver
from .utils.script_runner import run_python_script


class LinkRequest(enum.Enum):
    DEFAULT = "default"
    UNRESOLVED_STATIC = "unresolved-static"


class LinkPlanner:
    def __init__(self, platform: PlatformResolver, runner: ScriptRunner = run_python_script):
        self.platform = platform
        self.runner = runner

    def plan(self, interpreter: ResolvedInterpreter, link_request: LinkRequest, extension_module: bool = False) -> List[str]:
        """
        Returns the link directives for ``interpreter``.

        Args:
            interpreter: The resolved interpreter.
            link_request: The requested link mode.
            extension_module: True when building a module loaded by python
                itself, which on most platforms must not link libpython.
        """
        if link_request is LinkRequest.UNRESOLVED_STATIC:
            directive = self.platform.unresolved_static_directive()
            if directive is None:
                logger.debug(f"  - unresolved-static linking does not apply on {self.platform.name}")
                return []
            return [directive]

        if extension_module and not self.platform.links_extension_modules:
            logger.info("Extension module build: libpython is left unlinked.")
            return []

        directives = [self.platform.link_lib_directive(interpreter, self.runner)]
        if interpreter.libdir is not None:
            directives.append(link_search(interpreter.libdir))
        else:
            fallback = self.platform.libdir_fallback(interpreter)
            if fallback:
                logger.debug(f"  - LIBDIR unknown, guessing {fallback}")
                directives.append(link_search(fallback))
        return directives
