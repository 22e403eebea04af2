"""Trident pod lookup."""

from trident_connect.any.exceptions import TridentDecodeError, TridentPodNotFoundError
from trident_connect.any.log import get_logger
from trident_connect.any.utils import run_and_decode
from trident_connect.config.schemas import PodList

LOGGER = get_logger("trident_connect.kube.pods")

TRIDENT_POD_LABEL = "app=trident.netapp.io"

# Container in the Trident pod that runs the REST server and ships tridentctl
TRIDENT_CONTAINER = "trident-main"


def get_trident_pod(cli: str, namespace: str) -> str:
    """
    Find the single Trident pod in a namespace.

    Args:
    ----
        cli: Kubernetes CLI binary ("oc" or "kubectl")
        namespace: Namespace to search

    Returns:
    -------
        Name of the Trident pod

    Raises:
    ------
        TridentPodNotFoundError: If no pod, or more than one pod, carries the Trident label
        TridentCommandError: If the CLI cannot be run or exits non-zero
        TridentDecodeError: If the pod list JSON cannot be decoded or the pod has no name

    Example:
    -------
        >>> get_trident_pod("kubectl", "trident")
        'trident-7d8f9c6b5-x2x7q'

    """
    pod_list = run_and_decode(
        [cli, "get", "pod", "-n", namespace, "-l", TRIDENT_POD_LABEL, "-o=json"],
        PodList,
    )

    pods = pod_list.pods
    if len(pods) != 1:
        LOGGER.debug(f"Found {len(pods)} pods labeled {TRIDENT_POD_LABEL} in namespace {namespace}")
        raise TridentPodNotFoundError(namespace)

    name = pods[0].metadata.name
    if not name:
        raise TridentDecodeError(f"Trident pod in namespace {namespace} carries no name")

    LOGGER.debug(f"Found Trident pod {name} in namespace {namespace}")
    return name
