"""k8s2helm — turn plain Kubernetes manifests into a Helm chart.

Re-exports the public API for processors.
Processors can import directly from here or from k8s2helm.pacts.
"""

from k8s2helm.pacts.types import GroupVersionKind, Template
from k8s2helm.pacts.processor import Processor
from k8s2helm.pacts.helpers import full_name, group_version_kind, indent, to_lower_camel
from k8s2helm.core.errors import ConflictError, DecodeError
from k8s2helm.core.meta import AppMetadata
from k8s2helm.core.values import Values

__all__ = [
    "GroupVersionKind",
    "Template",
    "Processor",
    "full_name",
    "group_version_kind",
    "indent",
    "to_lower_camel",
    "ConflictError",
    "DecodeError",
    "AppMetadata",
    "Values",
]
