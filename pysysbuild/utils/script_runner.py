from ..errors import ScriptEncodingError, ScriptFailedError
from .command_executor import run_shell_command


def run_python_script(interpreter: str, script: str) -> str:
    """
    Runs a short program with the given interpreter via ``-c``.

    Args:
        interpreter: Name on PATH or path of the python executable.
        script: Program text.

    Returns:
        The decoded standard output.

    Raises:
        SpawnFailedError: The interpreter could not be started.
        ScriptFailedError: The interpreter exited with a nonzero status.
        ScriptEncodingError: Standard output was not valid UTF-8.
    """
    stdout, stderr, returncode = run_shell_command([interpreter, "-c", script])
    if returncode != 0:
        raise ScriptFailedError(interpreter, stderr.decode("utf-8", errors="replace"))
    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ScriptEncodingError(interpreter) from e
