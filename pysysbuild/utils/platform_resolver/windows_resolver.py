import ntpath

from ...cli_logger import logger
from ...directives import LinkMode, link_lib
from ...sysconfig_vars import fallback_config_vars
from .base_resolver import PlatformResolver


class WindowsResolver(PlatformResolver):
    """
    Windows links against the decorated pythonXY import library.

    Py_ENABLE_SHARED is not reported there and sysconfig carries none of the
    build flags, so both come from fixed knowledge instead of the interpreter.
    """

    name = "windows"
    links_extension_modules = True

    def get_config_vars(self, interpreter, runner, fallback_overrides=None):
        logger.warning("sysconfig has no build flags on Windows, using the default pyconfig.h values.")
        return fallback_config_vars(fallback_overrides)

    def link_lib_directive(self, interpreter, runner):
        version = interpreter.version
        minor = "" if version.minor is None else str(version.minor)
        return link_lib(f"pythonXY:python{version.major}{minor}")

    def unresolved_static_directive(self):
        # static-nobundle keeps extern symbols free of the __imp_ prefix
        # without needing pythonXY.lib at build time.
        return link_lib("pythonXY", LinkMode.STATIC_UNRESOLVED)

    def libdir_fallback(self, interpreter):
        return ntpath.join(interpreter.exec_prefix, "libs")
