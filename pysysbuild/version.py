import re
from dataclasses import dataclass
from typing import Optional

from packaging.version import InvalidVersion, Version

from .errors import ConfigurationError, VersionParseError

_VERSION_REPORT_RE = re.compile(r"\((\d+), (\d+)\)")


@dataclass(frozen=True)
class PythonVersion:
    """A requested or discovered Python version.

    ``minor`` of ``None`` means any minor version will do.
    """

    major: int
    minor: Optional[int] = None

    def __str__(self) -> str:
        minor = "*" if self.minor is None else str(self.minor)
        return f"{self.major}.{minor}"

    @classmethod
    def from_string(cls, text: str) -> "PythonVersion":
        """Parse a user-written request such as ``"3"`` or ``"3.8"``."""
        try:
            parsed = Version(str(text).strip())
        except InvalidVersion as e:
            raise ConfigurationError(f"Invalid python version '{text}': {e}") from e
        if parsed.epoch or parsed.pre or parsed.post is not None or parsed.dev is not None or parsed.local:
            raise ConfigurationError(
                f"Invalid python version '{text}': pre, post, dev, local and epoch parts are not allowed"
            )
        release = parsed.release
        if len(release) > 2:
            raise ConfigurationError(
                f"Invalid python version '{text}': only major or major.minor can be requested"
            )
        return cls(major=release[0], minor=release[1] if len(release) == 2 else None)


def parse_version_report(line: str) -> PythonVersion:
    """Parse the ``sys.version_info[0:2]`` line printed by an interpreter."""
    match = _VERSION_REPORT_RE.search(line)
    if not match:
        raise VersionParseError(f"Unexpected response to version query {line}")
    return PythonVersion(major=int(match.group(1)), minor=int(match.group(2)))


def matches(expected: PythonVersion, actual: PythonVersion) -> bool:
    """True if ``actual`` satisfies the ``expected`` request."""
    return actual.major == expected.major and (
        expected.minor is None or actual.minor == expected.minor
    )
