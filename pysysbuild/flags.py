"""Turning the interpreter's config vars into cfg lines and the propagation string.

Dependents receive the derived vars as ``cargo:python_flags``, a comma
separated list of ``{VAL,FLAG}_{name}={value}`` items. ``FLAG`` marks a var
that is only ever 0 or 1, ``VAL`` one that carries an arbitrary value. The
cfg line format loses that distinction, the propagation string keeps it so
that :func:`cfg_lines_from_python_flags` can rebuild the same cfg lines in a
dependent's build step without running python.
"""

from typing import Dict, List, Optional, Tuple

from .directives import cfg
from .errors import ConfigurationError
from .sysconfig_vars import SYSCONFIG_VARS, VarKind, is_value

CFG_KEY = "py_sys_config"

# (antecedent, consequent): Py_DEBUG implies Py_TRACE_REFS, which implies
# Py_REF_DEBUG. Applied once in this order; this is not a closure computation.
IMPLICATION_RULES = (
    ("Py_DEBUG", "Py_TRACE_REFS"),
    ("Py_TRACE_REFS", "Py_REF_DEBUG"),
)


def is_not_none_or_zero(value: Optional[str]) -> bool:
    return value is not None and value != "0"


def apply_implications(config_map: Dict[str, str]) -> Dict[str, str]:
    """Apply IMPLICATION_RULES in place, one pass. Returns the same map."""
    for antecedent, consequent in IMPLICATION_RULES:
        if is_not_none_or_zero(config_map.get(antecedent)):
            config_map[consequent] = "1"
    return config_map


def cfg_line_for_var(key: str, value: str) -> Optional[str]:
    if is_value(key):
        # cfg has no valued flags; the value becomes part of the name
        return cfg(f'{CFG_KEY}="{key}_{value}"')
    if value != "0":
        return cfg(f'{CFG_KEY}="{key}"')
    return None


def _ordered_items(config_map):
    declared = [var.name for var in SYSCONFIG_VARS]
    known = [(name, config_map[name]) for name in declared if name in config_map]
    extra = sorted((k, v) for k, v in config_map.items() if k not in declared)
    return known + extra


def render_cfg_lines(config_map: Dict[str, str]) -> List[str]:
    lines = []
    for key, value in _ordered_items(config_map):
        line = cfg_line_for_var(key, value)
        if line:
            lines.append(line)
    return lines


def serialize_flags(config_map: Dict[str, str]) -> str:
    items = []
    for key, value in _ordered_items(config_map):
        if is_value(key):
            items.append(f"{VarKind.VALUE.value}_{key}={value}")
        elif value != "0":
            items.append(f"{VarKind.FLAG.value}_{key}={value}")
    return ",".join(items)


def _split_python_flags(text: str) -> List[Tuple[VarKind, str, str]]:
    entries = []
    for item in filter(None, (part.strip() for part in text.split(","))):
        kind_name, sep, rest = item.partition("_")
        key, eq, value = rest.partition("=")
        if not sep or not eq or not key:
            raise ConfigurationError(f"Malformed python_flags entry '{item}'")
        try:
            kind = VarKind(kind_name)
        except ValueError:
            raise ConfigurationError(f"Malformed python_flags entry '{item}'") from None
        entries.append((kind, key, value))
    return entries


def parse_python_flags(text: str) -> Dict[str, str]:
    """
    Decode a ``python_flags`` string back into a config map.

    Raises:
        ConfigurationError: An entry is not ``VAL_name=value`` or ``FLAG_name=value``.
    """
    return {key: value for _, key, value in _split_python_flags(text)}


def cfg_lines_from_python_flags(text: str) -> List[str]:
    """
    Rebuild the ``py_sys_config`` cfg lines from a dependency's ``python_flags``.

    Kinds come from the ``VAL_``/``FLAG_`` prefix, not from SYSCONFIG_VARS,
    so flags published by a newer resolver survive the round trip.
    """
    lines = []
    for kind, key, value in _split_python_flags(text):
        if kind is VarKind.VALUE:
            lines.append(cfg(f'{CFG_KEY}="{key}_{value}"'))
        elif value != "0":
            lines.append(cfg(f'{CFG_KEY}="{key}"'))
    return lines
