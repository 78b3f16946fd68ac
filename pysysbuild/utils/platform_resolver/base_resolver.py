from abc import ABC, abstractmethod
from typing import Dict, Optional

from ...directives import LinkMode, link_lib
from ...interpreter import ResolvedInterpreter, ScriptRunner
from ...sysconfig_vars import query_config_vars


class PlatformResolver(ABC):
    """
    Host-specific decisions: which library to link and where the interpreter's
    build flags come from.

    The resolver pipeline talks to every platform through this interface.
    """

    name = "posix"
    generic_interpreter_name = "python"
    # Whether an extension module build still has to link libpython.
    links_extension_modules = False

    def get_config_vars(self, interpreter: str, runner: ScriptRunner, fallback_overrides=None) -> Dict[str, str]:
        return query_config_vars(interpreter, runner)

    @abstractmethod
    def link_lib_directive(self, interpreter: ResolvedInterpreter, runner: ScriptRunner) -> str:
        """Returns the rustc-link-lib line for a default-mode build."""

    def unresolved_static_directive(self) -> Optional[str]:
        """Directive for the unresolved-static link request, or None if unsupported."""
        return None

    def libdir_fallback(self, interpreter: ResolvedInterpreter) -> Optional[str]:
        """Search path to guess when sysconfig reports no LIBDIR."""
        return None

    @staticmethod
    def _libpython(interpreter: ResolvedInterpreter, mode: LinkMode) -> str:
        return link_lib(f"python{interpreter.ld_version}", mode)
