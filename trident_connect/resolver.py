"""
Operating mode resolution.

Decides, once per invocation and before the subcommand runs, how tridentctl reaches
the Trident REST API. Precedence is strict and short-circuiting:

1. --server on the command line -> DIRECT
2. TRIDENT_SERVER in the environment -> DIRECT
3. otherwise locate the Trident pod through oc/kubectl -> TUNNEL
   (or LOGS when the `logs` command finds no pod)
"""

import os
from collections.abc import Callable, Mapping

from trident_connect.any.exceptions import TridentPodNotFoundError
from trident_connect.any.log import get_logger
from trident_connect.config.session import POD_SERVER, SERVER_ENV_VAR, ResolvedConnection, SessionConfig
from trident_connect.kube.cli import detect_kubernetes_cli
from trident_connect.kube.namespace import get_current_namespace
from trident_connect.kube.pods import get_trident_pod
from trident_connect.types import OperatingMode

LOGGER = get_logger("trident_connect.resolver")

# The only command allowed to continue without a Trident pod
LOGS_COMMAND = "logs"


class ModeResolver:
    """
    Resolves the operating mode for one invocation.

    The three cluster lookups are injected so the container (or a test) can swap them.

    Example:
    -------
        ```python
        resolver = ModeResolver()
        connection = resolver.resolve(SessionConfig(namespace="trident"), "get")
        if connection.mode == OperatingMode.TUNNEL:
            print(connection.pod_name)
        else:
            print(connection.base_url())
        ```

    """

    def __init__(
        self,
        detect_cli: Callable[[], str] = detect_kubernetes_cli,
        current_namespace: Callable[[str], str] = get_current_namespace,
        locate_pod: Callable[[str, str], str] = get_trident_pod,
    ):
        self._detect_cli = detect_cli
        self._current_namespace = current_namespace
        self._locate_pod = locate_pod

    def resolve(
        self,
        config: SessionConfig,
        command_name: str,
        environ: Mapping[str, str] | None = None,
    ) -> ResolvedConnection:
        """
        Resolve the operating mode.

        Args:
        ----
            config: Settings from the command line
            command_name: Name of the subcommand about to run (e.g. "get", "logs")
            environ: Environment to read TRIDENT_SERVER from (defaults to os.environ)

        Returns:
        -------
            ResolvedConnection describing the chosen mode

        Raises:
        ------
            TridentCLINotFoundError: If neither oc nor kubectl works
            TridentLookupError: If the current namespace or pod list cannot be read
            TridentPodNotFoundError: If there isn't exactly one Trident pod (except for `logs`)

        """
        connection = self._resolve(config, command_name, os.environ if environ is None else environ)

        if config.debug:
            LOGGER.info(connection.summary())

        return connection

    def _resolve(self, config: SessionConfig, command_name: str, environ: Mapping[str, str]) -> ResolvedConnection:
        if config.server:
            return ResolvedConnection(mode=OperatingMode.DIRECT, server=config.server, debug=config.debug)

        env_server = environ.get(SERVER_ENV_VAR, "").strip()
        if env_server:
            return ResolvedConnection(mode=OperatingMode.DIRECT, server=env_server, debug=config.debug)

        cli = self._detect_cli()

        namespace = config.namespace
        if not namespace:
            namespace = self._current_namespace(cli)

        try:
            pod_name = self._locate_pod(cli, namespace)
        except TridentPodNotFoundError:
            # `logs` can still collect what exists without a running pod
            if command_name == LOGS_COMMAND:
                LOGGER.debug(f"No Trident pod in {namespace}, continuing in logs mode")
                return ResolvedConnection(
                    mode=OperatingMode.LOGS, namespace=namespace, cli=cli, debug=config.debug
                )
            raise

        return ResolvedConnection(
            mode=OperatingMode.TUNNEL,
            server=POD_SERVER,
            namespace=namespace,
            pod_name=pod_name,
            cli=cli,
            debug=config.debug,
        )
