"""
Trident connectivity exception classes.

This module defines custom exceptions for the connectivity layer to avoid masking
built-in Python errors and to give each failure class of mode resolution its own type.

All exceptions follow the naming convention Trident*Error.
"""


class TridentError(Exception):
    """
    Base exception for all Trident connectivity errors.

    All Trident exceptions inherit from this, allowing callers to catch every
    resolution or tunnel failure with a single except clause while not catching
    unrelated Python errors.
    """

    pass


class TridentCLINotFoundError(TridentError):
    """
    Raised when neither supported Kubernetes CLI answers a version probe.

    Discovery failures are fatal and never retried.

    Example:
    -------
        >>> detect_kubernetes_cli()  # neither `oc` nor `kubectl` installed
        TridentCLINotFoundError: Could not find the Kubernetes CLI.

    """

    pass


class TridentLookupError(TridentError):
    """Raised when the service account or pod list cannot be read from the cluster."""

    pass


class TridentCommandError(TridentLookupError):
    """
    Raised when a lookup subprocess could not be started or exited non-zero.

    Attributes:
    ----------
        cmd: The command line that was run
        returncode: Exit status of the process, or None if it never started

    """

    def __init__(self, message: str, cmd: list[str] | None = None, returncode: int | None = None):
        super().__init__(message)
        self.cmd = cmd or []
        self.returncode = returncode


class TridentDecodeError(TridentLookupError):
    """Raised when a lookup subprocess produced output that is not the expected JSON object."""

    pass


class TridentPodNotFoundError(TridentError):
    """
    Raised when zero or more than one Trident pod matches in a namespace.

    The namespace is kept so the caller can point the user at the -n option.

    Example:
    -------
        >>> get_trident_pod("kubectl", "default")
        TridentPodNotFoundError: could not find a Trident pod in the default namespace...

    """

    def __init__(self, namespace: str):
        super().__init__(
            f"could not find a Trident pod in the {namespace} namespace. "
            "You may need to use the -n option to specify the correct namespace."
        )
        self.namespace = namespace


class TridentTunnelError(TridentError):
    """
    Raised when a command tunneled into the Trident pod fails.

    The remote exit status and the captured output are kept so the caller can
    adopt them as its own.
    """

    def __init__(self, message: str, returncode: int, output: bytes = b""):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class TridentConfigurationError(TridentError):
    """
    Raised when session configuration is invalid or used in the wrong mode.

    This includes unknown output formats and requesting a tunnel outside tunnel mode.
    """

    pass
