"""Current namespace lookup through the default service account."""

from trident_connect.any.exceptions import TridentDecodeError
from trident_connect.any.log import get_logger
from trident_connect.any.utils import run_and_decode
from trident_connect.config.schemas import ServiceAccount

LOGGER = get_logger("trident_connect.kube.namespace")


def get_current_namespace(cli: str) -> str:
    """
    Get the namespace of the caller's current context.

    The default service account always exists in the active namespace, so its
    metadata tells us which namespace the CLI is pointed at.

    Args:
    ----
        cli: Kubernetes CLI binary ("oc" or "kubectl")

    Returns:
    -------
        Namespace name

    Raises:
    ------
        TridentCommandError: If the CLI cannot be run or exits non-zero
        TridentDecodeError: If the service account JSON cannot be decoded or has no namespace

    """
    service_account = run_and_decode([cli, "get", "serviceaccount", "default", "-o=json"], ServiceAccount)

    namespace = service_account.metadata.namespace
    if not namespace:
        raise TridentDecodeError("Default service account carries no namespace")

    LOGGER.debug(f"Current namespace: {namespace}")
    return namespace
