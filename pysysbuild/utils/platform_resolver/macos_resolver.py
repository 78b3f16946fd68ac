from ...cli_logger import logger
from ...directives import LinkMode
from ...errors import UnknownLinkModelError
from .base_resolver import PlatformResolver

LINK_MODEL_SCRIPT = (
    "import sysconfig; "
    "print('framework' if sysconfig.get_config_var('PYTHONFRAMEWORK') "
    "else ('shared' if sysconfig.get_config_var('Py_ENABLE_SHARED') else 'static'));"
)

# A framework build is a shared library.
LINK_MODELS = {
    "static": LinkMode.STATIC_BUNDLED,
    "shared": LinkMode.DYNAMIC,
    "framework": LinkMode.DYNAMIC,
}


class MacOSResolver(PlatformResolver):
    """macOS, where Py_ENABLE_SHARED is wrong for framework builds."""

    name = "macos"

    def get_link_model(self, interpreter, runner):
        # Asks the interpreter that was already resolved, never a fresh search.
        return runner(interpreter.executable, LINK_MODEL_SCRIPT).rstrip()

    def link_lib_directive(self, interpreter, runner):
        link_model = self.get_link_model(interpreter, runner)
        logger.debug(f"  - macOS link model: {link_model}")
        try:
            mode = LINK_MODELS[link_model]
        except KeyError:
            raise UnknownLinkModelError(link_model) from None
        return self._libpython(interpreter, mode)
