"""Public data types for processors — the sacred contracts."""

from dataclasses import dataclass, field
from typing import NamedTuple


class GroupVersionKind(NamedTuple):
    """Type identity of a K8s object (``policy``, ``v1``, ``PodDisruptionBudget``)."""
    group: str
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        """Recombine group and version the way manifests spell them."""
        return f"{self.group}/{self.version}" if self.group else self.version


@dataclass
class Template:
    """Output of a single processor: one chart template plus its default values."""
    name: str
    data: str
    values: dict = field(default_factory=dict)

    @property
    def filename(self) -> str:
        return self.name + ".yaml"

    def write(self, sink) -> None:
        """Write the rendered template text verbatim to *sink*."""
        sink.write(self.data)

