"""Formatting of the ``cargo:`` lines read by the build orchestrator."""

import enum

PREFIX = "cargo:"


class LinkMode(enum.Enum):
    DYNAMIC = ""
    STATIC_BUNDLED = "static="
    # A downstream consumer provides the library; nothing is bundled.
    STATIC_UNRESOLVED = "static-nobundle="


def link_lib(name: str, mode: LinkMode = LinkMode.DYNAMIC) -> str:
    return f"{PREFIX}rustc-link-lib={mode.value}{name}"


def link_search(path: str) -> str:
    return f"{PREFIX}rustc-link-search=native={path}"


def cfg(value: str) -> str:
    return f"{PREFIX}rustc-cfg={value}"


def metadata(key: str, value: str) -> str:
    """A value published to dependents' build scripts."""
    return f"{PREFIX}{key}={value}"
