"""
Kubernetes object schemas read from `oc` / `kubectl` JSON output.

Only the fields mode resolution needs are declared; everything else the API
server returns is ignored.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class ObjectMeta(BaseModel):
    """Subset of Kubernetes ObjectMeta."""

    name: str = ""
    namespace: str = ""

    model_config = ConfigDict(extra="ignore")


class ServiceAccount(BaseModel):
    """
    Kubernetes ServiceAccount (`get serviceaccount default -o=json`).

    Example
    -------
        {"kind": "ServiceAccount", "metadata": {"name": "default", "namespace": "trident"}}

    """

    metadata: Annotated[ObjectMeta, Field(default_factory=ObjectMeta)]

    model_config = ConfigDict(extra="ignore")


class Pod(BaseModel):
    """Kubernetes Pod, reduced to its metadata."""

    metadata: Annotated[ObjectMeta, Field(default_factory=ObjectMeta)]

    model_config = ConfigDict(extra="ignore")


class PodList(BaseModel):
    """
    Kubernetes PodList (`get pod -l app=trident.netapp.io -o=json`).

    `items` is null rather than empty on some API servers.
    """

    items: list[Pod] | None = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @property
    def pods(self) -> list[Pod]:
        """Items with a null list treated as empty."""
        return self.items or []
