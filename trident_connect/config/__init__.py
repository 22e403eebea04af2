"""Session configuration and Kubernetes object schemas."""

from trident_connect.config.schemas import ObjectMeta, Pod, PodList, ServiceAccount
from trident_connect.config.session import (
    BASE_URL_PATH,
    POD_SERVER,
    SERVER_ENV_VAR,
    ResolvedConnection,
    SessionConfig,
    TridentSession,
)

__all__ = [
    # Session
    "SessionConfig",
    "ResolvedConnection",
    "TridentSession",
    "SERVER_ENV_VAR",
    "POD_SERVER",
    "BASE_URL_PATH",
    # Kubernetes schemas
    "ObjectMeta",
    "ServiceAccount",
    "Pod",
    "PodList",
]
