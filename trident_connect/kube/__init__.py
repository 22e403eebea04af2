"""
Kube - cluster discovery through the `oc` / `kubectl` binaries.

Nothing here talks to the API server directly; authentication and context are
whatever the installed CLI is configured with.
"""

from trident_connect.kube.cli import CLI_CANDIDATES, CLI_KUBERNETES, CLI_OPENSHIFT, detect_kubernetes_cli
from trident_connect.kube.namespace import get_current_namespace
from trident_connect.kube.pods import TRIDENT_CONTAINER, TRIDENT_POD_LABEL, get_trident_pod

__all__ = [
    "CLI_OPENSHIFT",
    "CLI_KUBERNETES",
    "CLI_CANDIDATES",
    "TRIDENT_POD_LABEL",
    "TRIDENT_CONTAINER",
    "detect_kubernetes_cli",
    "get_current_namespace",
    "get_trident_pod",
]
