"""
Kubernetes CLI discovery.

Working with the Trident pod needs either the OpenShift CLI (`oc`) or the Kubernetes
CLI (`kubectl`). The first one that answers `version` successfully is used for every
later lookup and for the tunnel.
"""

import subprocess

from trident_connect.any.exceptions import TridentCLINotFoundError
from trident_connect.any.log import get_logger
from trident_connect.any.utils import EXIT_CODE_SUCCESS, exit_code_for, run_command

LOGGER = get_logger("trident_connect.kube.cli")

CLI_OPENSHIFT = "oc"
CLI_KUBERNETES = "kubectl"

# Preference order: OpenShift clusters also ship kubectl, not the other way round
CLI_CANDIDATES = (CLI_OPENSHIFT, CLI_KUBERNETES)


def probe_cli(cli: str) -> bool:
    """
    Check whether a CLI binary runs and answers `version` successfully.

    Args:
    ----
        cli: Binary name to probe

    Returns:
    -------
        True if `<cli> version` exited zero

    """
    try:
        run_command([cli, "version"], check=True, combine_output=True, text=False)
        err = None
    except (subprocess.CalledProcessError, OSError) as e:
        err = e

    code = exit_code_for(err)
    LOGGER.debug(f"Probed {cli}: exit status {code}")
    return code == EXIT_CODE_SUCCESS


def detect_kubernetes_cli(candidates: tuple[str, ...] = CLI_CANDIDATES) -> str:
    """
    Find the Kubernetes CLI to use.

    Each candidate is probed at most once, in order; output of the probes is discarded.

    Returns:
    -------
        Name of the first candidate that works ("oc" or "kubectl")

    Raises:
    ------
        TridentCLINotFoundError: If no candidate works

    Example:
    -------
        >>> detect_kubernetes_cli()
        'kubectl'

    """
    for cli in candidates:
        if probe_cli(cli):
            LOGGER.debug(f"Using Kubernetes CLI: {cli}")
            return cli

    raise TridentCLINotFoundError("Could not find the Kubernetes CLI.")
