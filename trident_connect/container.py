"""
Dependency injection container for trident-connect.

Wires the cluster lookups into the mode resolver and builds a command tunnel per
session. Uses dependency-injector so tests and embedding tools can override any
single piece.
"""

from dependency_injector import containers, providers

from trident_connect.config.session import TridentSession
from trident_connect.kube.cli import detect_kubernetes_cli
from trident_connect.kube.namespace import get_current_namespace
from trident_connect.kube.pods import get_trident_pod
from trident_connect.resolver import ModeResolver
from trident_connect.tunnel import PodCommandTunnel


class TridentIoCContainer(containers.DeclarativeContainer):
    """
    Inversion of Control (IoC) container for mode resolution and tunneling.

    Example:
    -------
        ```python
        from trident_connect.container import TridentIoCContainer

        container = TridentIoCContainer()

        # Pin the CLI instead of probing for it
        container.cli_detector.override(lambda: "kubectl")

        connection = container.mode_resolver().resolve(config, "get")
        ```

    """

    # Cluster lookups, provided as callables
    cli_detector = providers.Object(detect_kubernetes_cli)
    namespace_resolver = providers.Object(get_current_namespace)
    pod_locator = providers.Object(get_trident_pod)

    mode_resolver = providers.Factory(
        ModeResolver,
        detect_cli=cli_detector,
        current_namespace=namespace_resolver,
        locate_pod=pod_locator,
    )

    # Built per session: container.command_tunnel(session=session)
    command_tunnel = providers.Factory(PodCommandTunnel)


# Global container instance
container = TridentIoCContainer()


def get_mode_resolver() -> ModeResolver:
    """
    Get a mode resolver wired from the global container.

    Example:
    -------
        ```python
        from trident_connect.container import get_mode_resolver

        connection = get_mode_resolver().resolve(SessionConfig(), "version")
        ```

    """
    return container.mode_resolver()


def get_command_tunnel(session: TridentSession) -> PodCommandTunnel:
    """
    Get a command tunnel for a session in tunnel mode.

    Raises:
    ------
        TridentConfigurationError: If the session is not in tunnel mode

    """
    return container.command_tunnel(session=session)
