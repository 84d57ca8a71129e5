"""Processor base class — one per K8s kind the chart generator understands."""

from k8s2helm.pacts.helpers import group_version_kind
from k8s2helm.pacts.types import GroupVersionKind, Template


class Processor:
    """Base class for resource processors.

    Subclass and set ``gvk`` to the exact type identity handled. The
    dispatcher asks every registered processor in turn; ``match`` returning
    False is the normal "not mine" answer, not an error.
    """
    name: str = ""
    gvk: GroupVersionKind = GroupVersionKind("", "", "")

    def match(self, manifest: dict) -> bool:
        """Return True if this processor handles this manifest."""
        return group_version_kind(manifest) == self.gvk

    def process(self, app_meta, manifest: dict) -> Template | None:
        """Convert one manifest to a chart Template.

        Returns None when the manifest is not handled by this processor.
        Raises DecodeError when it is, but cannot be decoded.
        """
        return None
