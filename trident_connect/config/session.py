"""
Session configuration and resolved connection state.

SessionConfig holds what the user asked for (flags), ResolvedConnection holds what
mode resolution decided, and TridentSession pairs them with the exit status of the
last process run on the user's behalf. All three are created once per invocation
and passed down explicitly.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from trident_connect.any.exceptions import TridentConfigurationError
from trident_connect.any.log import get_logger
from trident_connect.any.utils import EXIT_CODE_SUCCESS, exit_code_for
from trident_connect.types import OperatingMode, OutputFormat

LOGGER = get_logger("trident_connect.config.session")

# Environment variable consulted when --server is not given
SERVER_ENV_VAR = "TRIDENT_SERVER"

# REST listener of the Trident main container, as seen from inside the pod
POD_SERVER = "127.0.0.1:8000"

BASE_URL_PATH = "/trident/v1"


class SessionConfig(BaseModel):
    """
    Settings supplied on the command line.

    Example:
    -------
        ```python
        config = SessionConfig(namespace="trident", debug=True, output_format="json")
        config.output_format  # OutputFormat.JSON
        ```

    """

    server: Annotated[str, Field(default="", description="Address/port of Trident REST interface")]
    namespace: Annotated[str, Field(default="", description="Namespace of Trident deployment")]
    debug: Annotated[bool, Field(default=False, description="Debug output")]
    output_format: Annotated[OutputFormat | None, Field(default=None, description="Output format")]

    model_config = ConfigDict(frozen=True)

    @field_validator("server", "namespace", mode="before")
    @classmethod
    def _strip(cls, v: str | None) -> str:
        return (v or "").strip()

    @field_validator("output_format", mode="before")
    @classmethod
    def _empty_format_is_default(cls, v):
        if v == "":
            return None
        return v


class ResolvedConnection(BaseModel):
    """
    Outcome of mode resolution for one invocation.

    In DIRECT mode only `server` is meaningful. In TUNNEL mode `server` is the pod's
    loopback listener and `pod_name`, `namespace` and `cli` identify where to exec.
    In LOGS mode there is no pod and no server.
    """

    mode: OperatingMode
    server: str = ""
    namespace: str = ""
    pod_name: str = ""
    cli: str = ""
    debug: bool = False

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_mode_fields(self) -> "ResolvedConnection":
        if self.mode == OperatingMode.DIRECT and not self.server:
            raise ValueError("direct mode requires a server address")
        if self.mode == OperatingMode.TUNNEL and not (self.pod_name and self.namespace and self.cli):
            raise ValueError("tunnel mode requires a pod name, namespace and CLI")
        if self.mode == OperatingMode.LOGS and self.pod_name:
            raise ValueError("logs mode has no pod target")
        return self

    def summary(self) -> str:
        """One-line human-readable description used for debug output."""
        if self.mode == OperatingMode.DIRECT:
            return f"Operating mode = {self.mode.value}, Server = {self.server}"
        if self.mode == OperatingMode.TUNNEL:
            return (
                f"Operating mode = {self.mode.value}, Trident pod = {self.pod_name}, "
                f"Namespace = {self.namespace}, CLI = {self.cli}"
            )
        return f"Operating mode = {self.mode.value}, Namespace = {self.namespace}, CLI = {self.cli}"

    def base_url(self) -> str:
        """
        Get the Trident REST base URL for request-building subcommands.

        Returns:
        -------
            URL such as "http://127.0.0.1:8000/trident/v1"

        Raises:
        ------
            TridentConfigurationError: In LOGS mode, where no server is known

        """
        if not self.server:
            raise TridentConfigurationError(f"No Trident server is available in {self.mode.value} mode")

        url = f"http://{self.server}{BASE_URL_PATH}"
        if self.debug:
            LOGGER.debug(f"Trident URL: {url}")
        return url


class TridentSession:
    """
    Per-invocation state handed to subcommands.

    Holds the immutable configuration and connection plus the exit status of the
    last external process, which the top-level caller adopts as its own.
    """

    def __init__(self, config: SessionConfig, connection: ResolvedConnection):
        self.config = config
        self.connection = connection
        self.exit_code = EXIT_CODE_SUCCESS

    @property
    def mode(self) -> OperatingMode:
        return self.connection.mode

    def record_exit(self, err: BaseException | None) -> int:
        """Store and return the exit status translated from a process outcome."""
        self.exit_code = exit_code_for(err)
        return self.exit_code

    def __repr__(self) -> str:
        """String representation."""
        return f"TridentSession(mode='{self.mode.value}', exit_code={self.exit_code})"
