"""The whole pipeline: request, interpreter, link plan, cfg flags, output."""

import os
from dataclasses import dataclass
from typing import List, Optional

from .cli_logger import logger
from .config import BuildRequest, load_build_request
from .directives import cfg, metadata
from .flags import apply_implications, render_cfg_lines, serialize_flags
from .interpreter import InterpreterLocator, ResolvedInterpreter, ScriptRunner
from .link_planner import LinkPlanner
from .utils.platform_resolver import PlatformResolver, get_platform_resolver
from .utils.script_runner import run_python_script
from .version import PythonVersion

# Oldest 3.x feature level a Py_3_N cfg is emitted for.
PY3_MIN_MINOR = 4


@dataclass(frozen=True)
class ResolutionOutput:
    interpreter: ResolvedInterpreter
    directives: List[str]
    python_flags: str

    def lines(self) -> List[str]:
        """Every line to print, the two published values last."""
        return self.directives + [
            metadata("python_flags", self.python_flags),
            metadata("python_interpreter", self.interpreter.executable),
        ]


def version_cfgs(version: PythonVersion, limited_api: bool = False) -> List[str]:
    """
    ``Py_3_N`` for every N from 4 up to the interpreter's minor, so that
    dependents can write ``#[cfg(Py_3_6)]`` for "3.6 or newer".
    """
    lines = []
    if version.major != 3:
        return lines
    if limited_api:
        lines.append(cfg("Py_LIMITED_API"))
    if version.minor is not None:
        for minor in range(PY3_MIN_MINOR, version.minor + 1):
            lines.append(cfg(f"Py_3_{minor}"))
    return lines


class Resolver:
    """
    Runs one resolution. Every decision is derived from the single
    ResolvedInterpreter found here; nothing is printed by this class.
    """

    def __init__(self, runner: ScriptRunner = run_python_script, platform: Optional[PlatformResolver] = None):
        self.runner = runner
        self.platform = platform or get_platform_resolver()
        self.locator = InterpreterLocator(runner, self.platform.generic_interpreter_name)
        self.planner = LinkPlanner(self.platform, runner)

    def find_interpreter(self, request: BuildRequest) -> ResolvedInterpreter:
        version, executable, lines = self.locator.locate(request.version, request.executable)
        return ResolvedInterpreter.from_config_lines(version, executable, lines)

    def resolve(self, request: BuildRequest) -> ResolutionOutput:
        logger.info(f"Resolving python {request.version} on {self.platform.name}")
        interpreter = self.find_interpreter(request)

        directives = self.planner.plan(interpreter, request.link_request, request.extension_module)
        directives += version_cfgs(interpreter.version, request.limited_api)

        config_map = self.platform.get_config_vars(
            interpreter.executable, self.runner, request.fallback_overrides
        )
        apply_implications(config_map)
        directives += render_cfg_lines(config_map)

        logger.success(f"Resolved python {interpreter.version} at {interpreter.executable}")
        return ResolutionOutput(
            interpreter=interpreter,
            directives=directives,
            python_flags=serialize_flags(config_map),
        )


def resolve_from_environment(path=".", environ=None, overrides=None,
                             runner: ScriptRunner = run_python_script,
                             platform: Optional[PlatformResolver] = None) -> ResolutionOutput:
    """Load the build request and resolve it. Conflicts fail before any probe."""
    environ = os.environ if environ is None else environ
    request = load_build_request(path, environ, overrides)
    return Resolver(runner, platform).resolve(request)
