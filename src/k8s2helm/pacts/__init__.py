"""Public contracts for processors — the sacred pacts."""

from k8s2helm.pacts.types import GroupVersionKind, Template
from k8s2helm.pacts.processor import Processor
from k8s2helm.pacts.helpers import full_name, group_version_kind, indent, to_lower_camel

__all__ = [
    "GroupVersionKind",
    "Template",
    "Processor",
    "full_name",
    "group_version_kind",
    "indent",
    "to_lower_camel",
]
