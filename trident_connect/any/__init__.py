"""
Any - components shared by every part of trident-connect.

Exceptions, logging setup, protocols, and the subprocess helpers used by both the
cluster lookups and the command tunnel.
"""

from trident_connect.any.exceptions import (
    TridentCLINotFoundError,
    TridentCommandError,
    TridentConfigurationError,
    TridentDecodeError,
    TridentError,
    TridentLookupError,
    TridentPodNotFoundError,
    TridentTunnelError,
)
from trident_connect.any.log import get_logger, setup_logging
from trident_connect.any.protocols import CommandExecutor
from trident_connect.any.utils import (
    EXIT_CODE_FAILURE,
    EXIT_CODE_SUCCESS,
    exit_code_for,
    run_and_decode,
    run_command,
)

__all__ = [
    # Exceptions
    "TridentError",
    "TridentCLINotFoundError",
    "TridentLookupError",
    "TridentCommandError",
    "TridentDecodeError",
    "TridentPodNotFoundError",
    "TridentTunnelError",
    "TridentConfigurationError",
    # Logging
    "get_logger",
    "setup_logging",
    # Protocols
    "CommandExecutor",
    # Utils
    "EXIT_CODE_SUCCESS",
    "EXIT_CODE_FAILURE",
    "exit_code_for",
    "run_and_decode",
    "run_command",
]
