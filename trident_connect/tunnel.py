"""
Command tunnel into the Trident pod.

In tunnel mode a subcommand does not call the REST API itself. It re-invokes
tridentctl inside the Trident main container, pointed at the pod's loopback
listener, and relays the result as if it had run locally:

    <cli> exec <pod> -n <namespace> -c trident-main -- tridentctl -s 127.0.0.1:8000 <args...>
"""

import subprocess
import sys
from typing import BinaryIO

from trident_connect.any.exceptions import TridentConfigurationError, TridentTunnelError
from trident_connect.any.log import get_logger
from trident_connect.any.utils import run_command
from trident_connect.config.session import TridentSession
from trident_connect.kube.pods import TRIDENT_CONTAINER
from trident_connect.types import OperatingMode

LOGGER = get_logger("trident_connect.tunnel")

CLI_BINARY = "tridentctl"


class PodCommandTunnel:
    """
    Runs tridentctl commands inside the Trident pod.

    Implements the CommandExecutor protocol. Every run records its exit status on
    the session, which the top-level caller adopts as the process exit status.

    Example:
    -------
        ```python
        tunnel = PodCommandTunnel(session)

        # Relay to our stdout/stderr
        code = tunnel.run_and_print(["get", "backend"])

        # Keep the bytes for further decoding
        raw = tunnel.run(["get", "backend", "-o", "json"])
        ```

    """

    def __init__(self, session: TridentSession, binary: str = CLI_BINARY):
        if session.mode != OperatingMode.TUNNEL:
            raise TridentConfigurationError(
                f"Cannot tunnel commands in {session.mode.value} mode; a Trident pod is required"
            )
        self._session = session
        self._binary = binary

    def build_cli_command(self, args: list[str], include_session_flags: bool = True) -> list[str]:
        """
        Build the tridentctl command line run inside the pod.

        Args:
        ----
            args: Subcommand arguments (e.g. ["get", "backend"])
            include_session_flags: Forward --debug and --output from this invocation

        Returns:
        -------
            ["tridentctl", "-s", <server>, ["--debug"], ["--output", <format>], *args]

        """
        connection = self._session.connection
        config = self._session.config

        command = [self._binary, "-s", connection.server]
        if include_session_flags:
            if config.debug:
                command.append("--debug")
            if config.output_format is not None:
                command.extend(["--output", config.output_format.value])
        command.extend(args)
        return command

    def build_exec_command(self, args: list[str], include_session_flags: bool = True) -> list[str]:
        """Wrap the tridentctl command line in `<cli> exec` addressed at the Trident pod."""
        connection = self._session.connection
        return [
            connection.cli,
            "exec",
            connection.pod_name,
            "-n",
            connection.namespace,
            "-c",
            TRIDENT_CONTAINER,
            "--",
            *self.build_cli_command(args, include_session_flags=include_session_flags),
        ]

    def _execute(self, command: list[str]) -> tuple[bytes, BaseException | None]:
        if self._session.config.debug:
            LOGGER.debug(f"Invoking tunneled command: {' '.join(command)}")

        try:
            result = run_command(command, check=True, combine_output=True, text=False)
        except subprocess.CalledProcessError as e:
            self._session.record_exit(e)
            return e.output or b"", e
        except OSError as e:
            self._session.record_exit(e)
            return str(e).encode(), e

        self._session.record_exit(None)
        return result.stdout or b"", None

    def run(self, args: list[str]) -> bytes:
        """
        Run a command in the pod and return its raw combined output.

        The invocation's --debug and --output flags are not forwarded: the caller
        consumes the bytes itself and passes whatever format flags it needs in args.

        Raises:
        ------
            TridentTunnelError: If the command could not be run or exited non-zero

        """
        output, err = self._execute(self.build_exec_command(args, include_session_flags=False))
        if err is not None:
            raise TridentTunnelError(
                f"Tunneled command 'tridentctl {' '.join(args)}' failed with exit status {self._session.exit_code}",
                returncode=self._session.exit_code,
                output=output,
            ) from err
        return output

    def run_and_print(
        self,
        args: list[str],
        stdout: BinaryIO | None = None,
        stderr: BinaryIO | None = None,
    ) -> int:
        """
        Run a command in the pod and relay its output verbatim.

        Output goes to stdout when the command succeeds and to stderr when it fails.

        Returns:
        -------
            Exit status of the tunneled command

        """
        output, err = self._execute(self.build_exec_command(args))

        if err is None:
            stream = stdout or sys.stdout.buffer
        else:
            stream = stderr or sys.stderr.buffer
        stream.write(output)
        stream.flush()

        return self._session.exit_code

    def __repr__(self) -> str:
        """String representation."""
        connection = self._session.connection
        return f"PodCommandTunnel(pod='{connection.pod_name}', namespace='{connection.namespace}')"
