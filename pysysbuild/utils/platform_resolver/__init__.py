import sys

from .base_resolver import PlatformResolver
from .macos_resolver import MacOSResolver
from .posix_resolver import PosixResolver
from .windows_resolver import WindowsResolver


def get_platform_resolver(platform=None) -> PlatformResolver:
    """
    Returns the resolver for a ``sys.platform`` value (the host's by default).
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return MacOSResolver()
    if platform == "win32":
        return WindowsResolver()
    return PosixResolver()


__all__ = [
    "PlatformResolver",
    "PosixResolver",
    "MacOSResolver",
    "WindowsResolver",
    "get_platform_resolver",
]
