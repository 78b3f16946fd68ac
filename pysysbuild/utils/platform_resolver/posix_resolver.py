from ...directives import LinkMode
from .base_resolver import PlatformResolver


class PosixResolver(PlatformResolver):
    """Linux and other unix-likes: trust Py_ENABLE_SHARED."""

    name = "posix"

    def link_lib_directive(self, interpreter, runner):
        mode = LinkMode.DYNAMIC if interpreter.enable_shared else LinkMode.STATIC_BUNDLED
        return self._libpython(interpreter, mode)
