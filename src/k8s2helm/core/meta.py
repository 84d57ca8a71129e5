"""Application metadata — chart naming, name trimming, and the metadata preamble."""

import os

import yaml

from k8s2helm.core.constants import (
    NAME_TRIM_CHARS, STANDARD_LABELS, _CHART_NAME_INVALID_RE,
)
from k8s2helm.pacts.helpers import group_version_kind, indent, object_name


def sanitize_chart_name(name: str) -> str:
    """Lowercase DNS-label form of *name*, usable as a Helm chart name."""
    cleaned = _CHART_NAME_INVALID_RE.sub("-", name.lower()).strip("-")
    return cleaned[:63].rstrip("-") or "chart"


def _dump_block(data: dict, n: int) -> str:
    """Dump a mapping as block YAML indented by *n*, without trailing newline."""
    text = yaml.dump(data, default_flow_style=False, sort_keys=True)
    return indent(text, n).rstrip("\n ")


class AppMetadata:
    """What processors need to know about the chart being generated.

    Call ``load`` for every manifest before processing so the shared name
    prefix can be detected.
    """

    def __init__(self, chart_name: str, trim_prefix: str | None = None):
        self.chart_name = chart_name
        self.trim_prefix = trim_prefix
        self._names: list[str] = []

    def load(self, manifest: dict) -> None:
        """Record a manifest's name for common prefix detection."""
        name = object_name(manifest)
        if name:
            self._names.append(name)

    @property
    def common_prefix(self) -> str:
        """Longest ``-``/``.``-terminated prefix shared by every loaded name."""
        if len(self._names) < 2:
            return ""
        shared = os.path.commonprefix(self._names)
        cut = max(shared.rfind("-"), shared.rfind("."))
        return shared[:cut + 1] if cut >= 0 else ""

    def trim_name(self, name: str) -> str:
        """Strip the chart-wide prefix from an object name.

        Uses the configured trim prefix, else the detected common prefix,
        else ``<chart_name>-``. Falls back to *name* if nothing would remain.
        """
        if self.trim_prefix is not None:
            prefix = self.trim_prefix
        else:
            prefix = self.common_prefix or f"{self.chart_name}-"
        trimmed = name[len(prefix):] if prefix and name.startswith(prefix) else name
        trimmed = trimmed.lstrip(NAME_TRIM_CHARS)
        return trimmed or name

    def render_meta(self, manifest: dict) -> str:
        """Render the apiVersion/kind/metadata preamble of a template.

        The result has no trailing newline; the caller appends ``spec``.
        Expects a manifest its processor has already decoded, so labels and
        annotations are string maps.
        """
        meta = manifest.get("metadata") or {}
        name = self.trim_name(object_name(manifest))
        lines = [
            f"apiVersion: {group_version_kind(manifest).api_version}",
            f"kind: {manifest.get('kind', '')}",
            "metadata:",
            f'  name: {{{{ include "{self.chart_name}.fullname" . }}}}-{name}',
            "  labels:",
        ]
        extra = {k: v for k, v in (meta.get("labels") or {}).items()
                 if k not in STANDARD_LABELS}
        if extra:
            lines.append(_dump_block(extra, 4))
        lines.append(f'  {{{{- include "{self.chart_name}.labels" . | nindent 4 }}}}')
        annotations = meta.get("annotations") or {}
        if annotations:
            lines.append("  annotations:")
            lines.append(_dump_block(annotations, 4))
        return "\n".join(lines)
