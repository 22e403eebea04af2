"""
trident-connect - connectivity resolution for the tridentctl client.

Decides, before any tridentctl command runs, how the Trident REST API is reached:
- Direct: talk to a server given by --server or TRIDENT_SERVER
- Tunnel: re-invoke tridentctl inside the Trident pod through oc/kubectl exec
- Logs: no Trident pod found, but `logs` may proceed without one

In tunnel mode the command tunnel relays output and exit status so the remote
run looks local.
"""

# ============================================================================
# CORE EXPORTS
# ============================================================================

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
from trident_connect.any.utils import exit_code_for, run_command
from trident_connect.config.session import ResolvedConnection, SessionConfig, TridentSession
from trident_connect.resolver import ModeResolver
from trident_connect.tunnel import PodCommandTunnel
from trident_connect.types import OperatingMode, OutputFormat

__version__ = "0.1.0"

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
    # Types
    "OperatingMode",
    "OutputFormat",
    # Session
    "SessionConfig",
    "ResolvedConnection",
    "TridentSession",
    # Resolution and tunneling
    "ModeResolver",
    "PodCommandTunnel",
    # Utils
    "exit_code_for",
    "run_command",
    # Version
    "__version__",
]
