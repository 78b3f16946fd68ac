"""Locating a Python interpreter of the requested version."""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .cli_logger import logger
from .errors import (
    ExtractionShapeError,
    InterpreterNotFoundError,
    ScriptError,
    VersionMismatchError,
    VersionParseError,
)
from .utils.script_runner import run_python_script
from .version import PythonVersion, matches, parse_version_report

# Prints executable, version, LIBDIR, Py_ENABLE_SHARED, ld version, exec prefix.
IDENTITY_SCRIPT = (
    "import sys; import sysconfig; print(sys.executable); "
    "print(sys.version_info[0:2]); "
    "print(sysconfig.get_config_var('LIBDIR')); "
    "print(sysconfig.get_config_var('Py_ENABLE_SHARED')); "
    "print(sysconfig.get_config_var('LDVERSION') or '%s%s' % "
    "(sysconfig.get_config_var('py_version_short'), sysconfig.get_config_var('DEBUG_EXT') or '')); "
    "print(sys.exec_prefix);"
)
IDENTITY_LINE_COUNT = 6

# How python prints a missing sysconfig entry.
NONE_MARKER = "None"

ScriptRunner = Callable[[str, str], str]


@dataclass(frozen=True)
class ResolvedInterpreter:
    """Everything the link planner needs to know about the chosen interpreter."""

    version: PythonVersion
    executable: str
    libdir: Optional[str]
    enable_shared: bool
    ld_version: str
    exec_prefix: str

    @classmethod
    def from_config_lines(cls, version: PythonVersion, executable: str, lines: List[str]) -> "ResolvedInterpreter":
        if len(lines) != IDENTITY_LINE_COUNT - 2:
            raise ExtractionShapeError("interpreter config", IDENTITY_LINE_COUNT, len(lines) + 2)
        libdir, enable_shared, ld_version, exec_prefix = lines
        return cls(
            version=version,
            executable=executable,
            libdir=None if libdir == NONE_MARKER else libdir,
            enable_shared=enable_shared == "1",
            ld_version=ld_version,
            exec_prefix=exec_prefix,
        )


def get_config_from_interpreter(interpreter: str, runner: ScriptRunner = run_python_script) -> Tuple[str, PythonVersion, List[str]]:
    """
    Runs the identity script with ``interpreter``.

    Returns:
        (executable, version, remaining config lines)

    Raises:
        ScriptError: The interpreter could not run the script.
        VersionParseError: The version line could not be parsed.
        ExtractionShapeError: The script printed an unexpected number of lines.
    """
    lines = runner(interpreter, IDENTITY_SCRIPT).splitlines()
    if len(lines) != IDENTITY_LINE_COUNT:
        raise ExtractionShapeError("interpreter config", IDENTITY_LINE_COUNT, len(lines))
    executable = lines[0]
    version = parse_version_report(lines[1])
    return executable, version, lines[2:]


class InterpreterLocator:
    """Finds the first interpreter on PATH that satisfies a version request.

    Candidates are tried in a fixed order so that the same host always picks
    the same interpreter.
    """

    def __init__(self, runner: ScriptRunner = run_python_script, generic_name: str = "python"):
        self.runner = runner
        self.generic_name = generic_name

    def candidate_names(self, expected: PythonVersion) -> List[str]:
        names = [self.generic_name, f"{self.generic_name}{expected.major}"]
        if expected.minor is not None:
            names.append(f"{self.generic_name}{expected.major}.{expected.minor}")
        return names

    def locate(self, expected: PythonVersion, override_path: Optional[str] = None) -> Tuple[PythonVersion, str, List[str]]:
        """
        Locate a suitable interpreter and extract its identity config.

        If ``override_path`` is given it is the only candidate, and a version
        mismatch is an error rather than a reason to keep searching.

        Returns:
            (version, executable, raw config lines)
        """
        if override_path:
            logger.info(f"Using explicit python interpreter: {override_path}")
            executable, version, lines = get_config_from_interpreter(override_path, self.runner)
            if not matches(expected, version):
                raise VersionMismatchError(executable, expected, version)
            return version, executable, lines

        names = self.candidate_names(expected)
        for name in names:
            try:
                executable, version, lines = get_config_from_interpreter(name, self.runner)
            except (ScriptError, VersionParseError) as e:
                logger.debug(f"  - Skipping '{name}': {e}")
                continue
            if not matches(expected, version):
                logger.debug(f"  - Skipping '{name}': found version {version}, expected {expected}")
                continue
            logger.info(f"Found python {version} at {executable} (via '{name}')")
            return version, executable, lines

        raise InterpreterNotFoundError(expected, names)
