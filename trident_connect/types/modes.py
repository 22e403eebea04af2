"""Operating mode and output format type definitions."""

from enum import Enum


class OperatingMode(Enum):
    """
    How tridentctl reaches the Trident REST API for one invocation.

    DIRECT talks to a known host:port, TUNNEL re-invokes tridentctl inside the
    Trident pod, LOGS is the degraded mode used by `logs` when no pod is found.
    """

    DIRECT = "direct"
    TUNNEL = "tunnel"
    LOGS = "logs"


class OutputFormat(str, Enum):
    """Output formats accepted by --output and forwarded to tunneled commands."""

    JSON = "json"
    YAML = "yaml"
    NAME = "name"
    WIDE = "wide"
