"""Subprocess helpers shared by the Kubernetes lookups and the command tunnel."""

import json
import subprocess
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from trident_connect.any.exceptions import TridentCommandError, TridentDecodeError, TridentTunnelError
from trident_connect.any.log import get_logger

LOGGER = get_logger("trident_connect.utils")

EXIT_CODE_SUCCESS = 0
EXIT_CODE_FAILURE = 1

ModelT = TypeVar("ModelT", bound=BaseModel)


def run_command(
    cmd: list[str],
    check: bool = True,
    combine_output: bool = False,
    text: bool = True,
) -> subprocess.CompletedProcess:
    """
    Run a command with consistent handling.

    Output is always captured. No timeout is applied: an unresponsive CLI blocks the caller.

    Args:
    ----
        cmd: Command and arguments as a list
        check: If True, raise CalledProcessError on non-zero exit
        combine_output: If True, interleave stderr into stdout
        text: If True, decode output as text; raw bytes otherwise

    Returns:
    -------
        CompletedProcess instance with returncode, stdout, stderr

    Raises:
    ------
        subprocess.CalledProcessError: If check=True and command fails
        OSError: If the executable cannot be started

    Example:
    -------
        ```python
        from trident_connect.any.utils import run_command

        result = run_command(["kubectl", "version"], check=False)
        if result.returncode != 0:
            print(f"Command failed: {result.stderr}")

        # Combined output as bytes, the way tunneled commands are captured
        result = run_command(["oc", "exec", "trident-abc", "--", "tridentctl", "version"],
                             combine_output=True, text=False)
        ```

    """
    LOGGER.debug(f"Running command: {' '.join(cmd)}")

    if combine_output:
        return subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=text,
            check=check,
        )

    return subprocess.run(
        cmd,
        capture_output=True,
        text=text,
        check=check,
    )


def run_and_decode(cmd: list[str], model: type[ModelT]) -> ModelT:
    """
    Run a command and decode its JSON stdout into a pydantic model.

    Stdout is decoded while the process is still running, so large responses never
    stall the child on a full pipe. The result is only trusted once the process has
    exited zero: a non-zero exit wins over any decode problem, and no partially
    decoded object is ever returned.

    Args:
    ----
        cmd: Command and arguments as a list
        model: Pydantic model describing the expected JSON object

    Returns:
    -------
        Validated model instance

    Raises:
    ------
        TridentCommandError: If the process cannot be started or exits non-zero
        TridentDecodeError: If stdout is not valid JSON or does not fit the model

    """
    LOGGER.debug(f"Running command: {' '.join(cmd)}")

    try:
        # stderr is discarded; the exit status is what decides success
        process = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            errors="replace",
        )
    except OSError as e:
        raise TridentCommandError(f"Failed to run {cmd[0]}: {e}", cmd=cmd) from e

    decode_error: Exception | None = None
    data = None
    with process:
        try:
            data = json.load(process.stdout)
        except json.JSONDecodeError as e:
            decode_error = e
        returncode = process.wait()

    if returncode != EXIT_CODE_SUCCESS:
        raise TridentCommandError(
            f"Command '{' '.join(cmd)}' exited with status {returncode}",
            cmd=cmd,
            returncode=returncode,
        )

    if decode_error is not None:
        raise TridentDecodeError(f"Failed to decode output of '{' '.join(cmd)}': {decode_error}") from decode_error

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise TridentDecodeError(f"Unexpected output of '{' '.join(cmd)}': {e}") from e


def exit_code_for(err: BaseException | None) -> int:
    """
    Translate the outcome of a process run into an exit status.

    A process killed by signal N has no exit status of its own; it is reported as
    128 + N, the value a POSIX shell gives it, instead of the generic failure 1 or the
    -1 that a raw wait status would yield.

    Args:
    ----
        err: None on success, otherwise the error raised while running the process

    Returns:
    -------
        0 for None, the process's own status when it exited, 128 + N when it was killed
        by signal N, 1 for anything else

    Example:
    -------
        >>> exit_code_for(None)
        0
        >>> exit_code_for(subprocess.CalledProcessError(3, ["kubectl"]))
        3
        >>> exit_code_for(subprocess.CalledProcessError(-9, ["kubectl"]))
        137
        >>> exit_code_for(FileNotFoundError("oc"))
        1

    """
    if err is None:
        return EXIT_CODE_SUCCESS

    if not isinstance(err, (subprocess.CalledProcessError, TridentCommandError, TridentTunnelError)):
        return EXIT_CODE_FAILURE

    returncode = err.returncode
    if returncode is None:
        # Never started
        return EXIT_CODE_FAILURE

    if returncode < 0:
        # Killed by a signal; report it the way a shell does
        return 128 - returncode

    return returncode
