import subprocess
import shlex
from ..cli_logger import logger
from ..errors import SpawnFailedError

def run_shell_command(command, env=None, input_data=None, cwd=None):
    """
    Executes a command and captures its output.

    Output is returned undecoded so that callers decide how to treat bytes
    that are not valid text. No timeout is applied: the call blocks until
    the child exits.

    Args:
        command (list): The command to execute as a list of strings.
        env (dict, optional): A dictionary of environment variables.
        input_data (bytes, optional): Data to be passed to the command's stdin.
        cwd (str, optional): The working directory for the command.

    Returns:
        A tuple (stdout, stderr, return_code) with stdout and stderr as bytes.

    Raises:
        SpawnFailedError: If the executable could not be started.
    """
    logger.debug(f"Running: {shlex.join(command)}")
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            env=env,
            input=input_data,
            check=False,
            cwd=cwd
        )
    except OSError as e:
        # FileNotFoundError, PermissionError and friends
        raise SpawnFailedError(command[0], e) from e
    return result.stdout, result.stderr, result.returncode
