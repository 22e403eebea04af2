"""
Protocol definitions for trident-connect.

These protocols define the contracts that subcommands rely on, so that where a
command runs is decided apart from what the command does.

All protocols follow PEP 544 (Structural Subtyping / Protocol).
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CommandExecutor(Protocol):
    """
    Protocol for running a tridentctl invocation somewhere other than here.

    Implementations:
    - tunnel.py - PodCommandTunnel (re-invokes tridentctl inside the Trident pod)
    """

    def run(self, args: list[str]) -> bytes:
        """
        Run a command and return its combined output.

        Args:
        ----
            args: tridentctl arguments (e.g. ["get", "backend", "-o", "json"])

        Returns:
        -------
            Raw combined stdout/stderr of the command

        Raises:
        ------
            TridentTunnelError: If the command could not run or exited non-zero

        """
        ...

    def run_and_print(self, args: list[str]) -> int:
        """
        Run a command and relay its output to this process's stdout or stderr.

        Args:
        ----
            args: tridentctl arguments

        Returns:
        -------
            Exit status of the command

        """
        ...
