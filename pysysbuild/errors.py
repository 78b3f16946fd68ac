"""Exceptions raised while resolving a Python interpreter's build configuration."""


class ResolverError(Exception):
    """Base class for every error that aborts a resolution run."""


class ConfigurationError(ResolverError):
    """The build request could not be assembled from config, env or options."""


class ConfigConflictError(ConfigurationError):
    """Mutually exclusive settings were requested together."""


class ScriptError(ResolverError):
    """Running a script with an interpreter failed."""

    def __init__(self, interpreter, message):
        super().__init__(message)
        self.interpreter = interpreter


class SpawnFailedError(ScriptError):
    def __init__(self, interpreter, cause):
        super().__init__(interpreter, f"failed to run python interpreter `{interpreter}`: {cause}")
        self.cause = cause


class ScriptFailedError(ScriptError):
    def __init__(self, interpreter, stderr):
        super().__init__(interpreter, f"python script failed with stderr:\n\n{stderr}")
        self.stderr = stderr


class ScriptEncodingError(ScriptError):
    def __init__(self, interpreter):
        super().__init__(interpreter, f"python interpreter `{interpreter}` wrote output that is not valid UTF-8")


class VersionParseError(ResolverError):
    """An interpreter answered the version query with something unexpected."""


class VersionMismatchError(ResolverError):
    def __init__(self, executable, expected, found):
        super().__init__(
            f"Wrong python version for the explicit interpreter {executable}\n"
            f"\texpected {expected} != found {found}"
        )
        self.executable = executable
        self.expected = expected
        self.found = found


class InterpreterNotFoundError(ResolverError):
    def __init__(self, expected, tried=()):
        message = f"No python interpreter found of version {expected}"
        if tried:
            message += f" (tried: {', '.join(tried)})"
        super().__init__(message)
        self.expected = expected
        self.tried = list(tried)


class ExtractionShapeError(ResolverError):
    """A script printed a different number of lines than the protocol expects."""

    def __init__(self, what, expected, found):
        super().__init__(
            f"python stdout for {what} didn't return expected number of lines: "
            f"expected {expected}, got {found}"
        )
        self.expected = expected
        self.found = found


class UnknownLinkModelError(ResolverError):
    def __init__(self, link_model):
        super().__init__(f"unknown linkmodel {link_model}")
        self.link_model = link_model
