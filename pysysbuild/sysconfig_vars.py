"""Interpreter compile-time defines exported as ``py_sys_config`` cfg flags.

Each name here is passed on as ``--cfg=py_sys_config="{name}"`` so that code
can use ``#[cfg(py_sys_config="{name}")]`` the way C uses ``#ifdef``. See
Misc/SpecialBuilds.txt in the CPython source for what they mean.
"""

import enum
from typing import Dict, NamedTuple

from .errors import ConfigurationError, ExtractionShapeError
from .interpreter import NONE_MARKER, ScriptRunner
from .utils.script_runner import run_python_script


class VarKind(enum.Enum):
    # value is "0" or nonzero
    FLAG = "FLAG"
    # arbitrary value, rendered as {name}_{value}
    VALUE = "VAL"


class ConfigVar(NamedTuple):
    name: str
    kind: VarKind


SYSCONFIG_VARS = (
    ConfigVar("Py_USING_UNICODE", VarKind.FLAG),
    ConfigVar("Py_UNICODE_WIDE", VarKind.FLAG),
    ConfigVar("WITH_THREAD", VarKind.FLAG),
    ConfigVar("Py_DEBUG", VarKind.FLAG),
    ConfigVar("Py_REF_DEBUG", VarKind.FLAG),
    ConfigVar("Py_TRACE_REFS", VarKind.FLAG),
    ConfigVar("COUNT_ALLOCS", VarKind.FLAG),
    # Not present on python 3.3+, which is always wide.
    ConfigVar("Py_UNICODE_SIZE", VarKind.VALUE),
)

_KINDS = {var.name: var.kind for var in SYSCONFIG_VARS}

# Windows' sysconfig has none of the build flags. These are the defaults from
# PC/pyconfig.h in the CPython source; a custom build needs [sysconfig.fallback]
# overrides in pysysbuild.toml.
FALLBACK_CONFIG_VARS = {
    "Py_USING_UNICODE": "1",
    "Py_UNICODE_WIDE": "0",
    "WITH_THREAD": "1",
    "Py_UNICODE_SIZE": "2",
}


def kind_of(name: str) -> VarKind:
    """Kind of a config var; names outside SYSCONFIG_VARS behave as flags."""
    return _KINDS.get(name, VarKind.FLAG)


def is_value(name: str) -> bool:
    return kind_of(name) is VarKind.VALUE


def build_config_vars_script() -> str:
    script = "import sysconfig; config = sysconfig.get_config_vars();"
    for var in SYSCONFIG_VARS:
        default = "None" if var.kind is VarKind.VALUE else "0"
        script += f"print(config.get('{var.name}', {default}));"
    return script


def parse_config_vars(output: str) -> Dict[str, str]:
    """Map the flag script's output back onto SYSCONFIG_VARS.

    A value-kind var the interpreter does not define is left out entirely.
    """
    lines = output.splitlines()
    if len(lines) != len(SYSCONFIG_VARS):
        raise ExtractionShapeError("sysconfig flags", len(SYSCONFIG_VARS), len(lines))
    config_map = {}
    for var, line in zip(SYSCONFIG_VARS, lines):
        if var.kind is VarKind.VALUE and line == NONE_MARKER:
            continue
        config_map[var.name] = line
    return config_map


def query_config_vars(interpreter: str, runner: ScriptRunner = run_python_script) -> Dict[str, str]:
    """Ask the interpreter's sysconfig for every declared var."""
    return parse_config_vars(runner(interpreter, build_config_vars_script()))


def fallback_config_vars(overrides=None) -> Dict[str, str]:
    """The static table, with user overrides merged on top."""
    config_map = dict(FALLBACK_CONFIG_VARS)
    for name, value in (overrides or {}).items():
        if name not in _KINDS:
            known = ", ".join(var.name for var in SYSCONFIG_VARS)
            raise ConfigurationError(f"Unknown sysconfig fallback '{name}'. Known names: {known}")
        if isinstance(value, bool):
            value = int(value)
        config_map[name] = str(value)
    return config_map
