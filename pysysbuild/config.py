import toml
import os
import re
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional

from .cli_logger import logger
from .errors import ConfigConflictError, ConfigurationError
from .link_planner import LinkRequest
from .sysconfig_vars import fallback_config_vars
from .version import PythonVersion

CONFIG_FILE = "pysysbuild.toml"

EXECUTABLE_ENV = "PYTHON_SYS_EXECUTABLE"
LINK_MODE_FEATURES = {
    LinkRequest.DEFAULT: "CARGO_FEATURE_LINK_MODE_DEFAULT",
    LinkRequest.UNRESOLVED_STATIC: "CARGO_FEATURE_LINK_MODE_UNRESOLVED_STATIC",
}
EXTENSION_MODULE_FEATURE = "CARGO_FEATURE_EXTENSION_MODULE"
LIMITED_API_FEATURE = "CARGO_FEATURE_PEP_384"

_VERSION_FEATURE_RE = re.compile(r"^CARGO_FEATURE_PYTHON_(\d+)(?:_(\d+))?$")


@dataclass(frozen=True)
class BuildRequest:
    """Everything a resolution run was asked to do, folded from all sources."""

    version: PythonVersion
    executable: Optional[str] = None
    link_request: LinkRequest = LinkRequest.DEFAULT
    extension_module: bool = False
    limited_api: bool = False
    fallback_overrides: Dict[str, str] = field(default_factory=dict)

    def to_dict(self):
        data = asdict(self)
        data["version"] = str(self.version)
        data["link_request"] = self.link_request.value
        return data


def load_config(path="."):
    """
    Read pysysbuild.toml from ``path``.

    A missing file is an empty config. A file that cannot be read or parsed
    aborts the run, since silently ignoring it would build the wrong thing.
    """
    config_path = os.path.join(path, CONFIG_FILE)
    if not os.path.exists(config_path):
        logger.debug(f"No {CONFIG_FILE} at {config_path}, using environment only.")
        return {}
    logger.debug(f"Loading configuration from {config_path}")
    try:
        with open(config_path, "r") as f:
            return toml.load(f)
    except toml.TomlDecodeError as e:
        raise ConfigurationError(f"Error decoding TOML file at {config_path}: {e}") from e
    except IOError as e:
        raise ConfigurationError(f"Error reading configuration file at {config_path}: {e}") from e


def version_from_features(environ) -> Optional[PythonVersion]:
    """
    Pick the requested version from ``CARGO_FEATURE_PYTHON_*`` variables.

    ``PYTHON_3_8`` outranks ``PYTHON_3``. Two different major.minor features,
    or a bare major that disagrees with the chosen version, is a conflict.
    """
    full, bare = set(), set()
    for name in environ:
        match = _VERSION_FEATURE_RE.match(name)
        if not match:
            continue
        major, minor = match.groups()
        if minor is None:
            bare.add(PythonVersion(int(major)))
        else:
            full.add(PythonVersion(int(major), int(minor)))

    if len(full) > 1:
        raise ConfigConflictError(
            "Only one python version feature can be enabled, found: "
            + ", ".join(sorted(str(v) for v in full))
        )
    if full:
        chosen = next(iter(full))
        others = [v for v in bare if v.major != chosen.major]
        if others:
            raise ConfigConflictError(
                f"Python version feature {others[0]} conflicts with {chosen}"
            )
        return chosen
    if len(bare) > 1:
        raise ConfigConflictError(
            "Only one python version feature can be enabled, found: "
            + ", ".join(sorted(str(v) for v in bare))
        )
    return next(iter(bare), None)


def link_request_from_features(environ) -> Optional[LinkRequest]:
    requested = [mode for mode, name in LINK_MODE_FEATURES.items() if name in environ]
    if len(requested) > 1:
        raise ConfigConflictError(
            "link-mode-default and link-mode-unresolved-static are mutually exclusive"
        )
    return requested[0] if requested else None


def _link_request_from_string(value, source):
    try:
        return LinkRequest(str(value))
    except ValueError:
        choices = ", ".join(mode.value for mode in LinkRequest)
        raise ConfigurationError(f"Invalid link mode '{value}' in {source}. Choose one of: {choices}") from None


def _config_bool(python_conf, key):
    value = python_conf.get(key)
    if value is not None and not isinstance(value, bool):
        raise ConfigurationError(
            f"[python] {key} in {CONFIG_FILE} must be true or false, got {value!r}"
        )
    return value


def _config_version(python_conf):
    value = python_conf.get("version")
    if value is None:
        return None
    # A bare 3.10 in TOML is the float 3.1.
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ConfigurationError(
            f"[python] version in {CONFIG_FILE} must be a quoted string such as \"3.10\", got {value!r}"
        )
    return PythonVersion.from_string(str(value))


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def load_build_request(path=".", environ=None, overrides=None) -> BuildRequest:
    """
    Fold command line overrides, the environment and pysysbuild.toml into a
    BuildRequest, in that order of precedence.

    All conflict checks happen here, before any interpreter is probed.

    Raises:
        ConfigConflictError: Mutually exclusive settings were requested.
        ConfigurationError: No version was requested or a value is invalid.
    """
    environ = os.environ if environ is None else environ
    overrides = overrides or {}
    conf = load_config(path)
    python_conf = conf.get("python", {})

    env_link_request = link_request_from_features(environ)
    link_request = overrides.get("link_mode")
    if link_request is not None:
        link_request = _link_request_from_string(link_request, "--link-mode")
    elif env_link_request is not None:
        link_request = env_link_request
    elif "link_mode" in python_conf:
        link_request = _link_request_from_string(python_conf["link_mode"], CONFIG_FILE)
    else:
        link_request = LinkRequest.DEFAULT

    version = overrides.get("version")
    if version is not None:
        version = PythonVersion.from_string(version)
    else:
        version = version_from_features(environ)
    file_version = _config_version(python_conf)
    if version is None:
        version = file_version
    if version is None:
        raise ConfigurationError(
            "No python version requested. Enable a python3 / python3-N feature, "
            f"pass --python-version or set [python] version in {CONFIG_FILE}."
        )

    executable = _first_set(
        overrides.get("executable"),
        environ.get(EXECUTABLE_ENV) or None,
        python_conf.get("executable"),
    )
    extension_module = _first_set(
        overrides.get("extension_module"),
        True if EXTENSION_MODULE_FEATURE in environ else None,
        _config_bool(python_conf, "extension_module"),
    )
    limited_api = _first_set(
        overrides.get("limited_api"),
        True if LIMITED_API_FEATURE in environ else None,
        _config_bool(python_conf, "limited_api"),
    )

    fallback_overrides = conf.get("sysconfig", {}).get("fallback", {})
    # Validates the names, the merged table itself is built by the platform.
    fallback_config_vars(fallback_overrides)

    request = BuildRequest(
        version=version,
        executable=executable,
        link_request=link_request,
        extension_module=bool(extension_module),
        limited_api=bool(limited_api),
        fallback_overrides=dict(fallback_overrides),
    )
    logger.debug(f"Build request: {request.to_dict()}")
    return request


def log_dir_from_config(path="."):
    return load_config(path).get("logging", {}).get("dir")
