"""PodDisruptionBudget processor — PDB manifest to a toggleable chart template."""

from dataclasses import dataclass, field

import yaml

from k8s2helm.core.constants import PDB_GVK, SELECTOR_INDENT, SELECTOR_LABELS_INDENT
from k8s2helm.core.errors import DecodeError
from k8s2helm.core.values import Values
from k8s2helm.pacts.helpers import full_name, indent, to_lower_camel
from k8s2helm.pacts.processor import Processor
from k8s2helm.pacts.types import Template


@dataclass
class LabelSelectorRequirement:
    key: str
    operator: str
    values: list[str] = field(default_factory=list)


@dataclass
class LabelSelector:
    match_labels: dict[str, str] = field(default_factory=dict)
    match_expressions: list[LabelSelectorRequirement] = field(default_factory=list)


@dataclass
class PodDisruptionBudgetSpec:
    """Decoded spec. Both thresholds may be set; exclusivity is left to the API server."""
    min_available: int | str | None = None
    max_unavailable: int | str | None = None
    selector: LabelSelector | None = None


@dataclass
class PodDisruptionBudget:
    name: str
    spec: PodDisruptionBudgetSpec


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _expect(value, types, resource: str, where: str):
    # bool is an int subclass, never a valid int-or-string
    if isinstance(value, bool) or not isinstance(value, types):
        raise DecodeError(resource, f"{where}: unexpected {type(value).__name__}")
    return value


def _decode_str_map(raw, resource: str, where: str) -> dict[str, str]:
    _expect(raw, dict, resource, where)
    for k, v in raw.items():
        _expect(k, str, resource, f"{where} key")
        _expect(v, str, resource, f"{where}.{k}")
    return dict(raw)


def _decode_int_or_string(raw, resource: str, where: str) -> int | str | None:
    if raw is None:
        return None
    return _expect(raw, (int, str), resource, where)


def _decode_selector(raw, resource: str) -> LabelSelector | None:
    if raw is None:
        return None
    _expect(raw, dict, resource, "spec.selector")
    selector = LabelSelector()
    if raw.get("matchLabels") is not None:
        selector.match_labels = _decode_str_map(
            raw["matchLabels"], resource, "spec.selector.matchLabels")
    exprs = raw.get("matchExpressions")
    if exprs is not None:
        _expect(exprs, list, resource, "spec.selector.matchExpressions")
        for i, expr in enumerate(exprs):
            where = f"spec.selector.matchExpressions[{i}]"
            _expect(expr, dict, resource, where)
            values = expr.get("values") or []
            _expect(values, list, resource, f"{where}.values")
            selector.match_expressions.append(LabelSelectorRequirement(
                key=_expect(expr.get("key"), str, resource, f"{where}.key"),
                operator=_expect(expr.get("operator"), str, resource, f"{where}.operator"),
                values=[_expect(v, str, resource, f"{where}.values") for v in values],
            ))
    return selector


def decode_pod_disruption_budget(manifest: dict) -> PodDisruptionBudget:
    """Decode an untyped PDB manifest, raising DecodeError on schema mismatch."""
    resource = full_name(manifest)
    meta = _expect(manifest.get("metadata") or {}, dict, resource, "metadata")
    name = _expect(meta.get("name", ""), str, resource, "metadata.name")
    if not name:
        raise DecodeError(resource, "metadata.name: must not be empty")
    for key in ("labels", "annotations"):
        if meta.get(key) is not None:
            _decode_str_map(meta[key], resource, f"metadata.{key}")
    raw_spec = _expect(manifest.get("spec") or {}, dict, resource, "spec")
    spec = PodDisruptionBudgetSpec(
        min_available=_decode_int_or_string(
            raw_spec.get("minAvailable"), resource, "spec.minAvailable"),
        max_unavailable=_decode_int_or_string(
            raw_spec.get("maxUnavailable"), resource, "spec.maxUnavailable"),
        selector=_decode_selector(raw_spec.get("selector"), resource),
    )
    return PodDisruptionBudget(name=name, spec=spec)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def serialize_selector(selector: LabelSelector | None) -> str:
    """Dump the selector as YAML ready to sit under ``selector:`` in the template.

    matchLabels always comes last, bare when empty, so the included
    selector labels land inside it.
    """
    data: dict = {}
    if selector and selector.match_expressions:
        data["matchExpressions"] = [
            {"key": e.key, "operator": e.operator, **({"values": e.values} if e.values else {})}
            for e in selector.match_expressions
        ]
    text = yaml.dump(data, default_flow_style=False, sort_keys=False) if data else ""
    if selector and selector.match_labels:
        text += yaml.dump({"matchLabels": selector.match_labels},
                          default_flow_style=False, sort_keys=True)
    else:
        text += "matchLabels:\n"
    return indent(text, SELECTOR_INDENT).rstrip("\n ")


def threshold_value(value: int | str | None) -> str:
    """Stringify an int-or-string threshold; absent becomes ``""``."""
    return "" if value is None else str(value)


def render_spec(name: str, selector: str, chart_name: str) -> str:
    """Render the spec stanza; each threshold line exists only when its value is set."""
    return (
        "\nspec:\n"
        f"  {{{{ with .Values.{name}.minAvailable -}}}}\n"
        "  minAvailable: {{ . }}\n"
        "  {{ end -}}\n"
        f"  {{{{ with .Values.{name}.maxUnavailable -}}}}\n"
        "  maxUnavailable: {{ . }}\n"
        "  {{ end -}}\n"
        "  selector:\n"
        f"{selector}\n"
        f'    {{{{- include "{chart_name}.selectorLabels" . '
        f"| nindent {SELECTOR_LABELS_INDENT} }}}}"
    )


def wrap_enabled(name: str, body: str) -> str:
    """Guard a whole document behind ``.Values.<name>.enabled``."""
    return f"{{{{ if .Values.{name}.enabled }}}}\n{body}\n{{{{ end }}}}\n"


class PodDisruptionBudgetProcessor(Processor):
    """Turn policy/v1 PodDisruptionBudgets into templates with overridable thresholds."""
    name = "poddisruptionbudget"
    gvk = PDB_GVK

    def process(self, app_meta, manifest):
        if not self.match(manifest):
            return None
        pdb = decode_pod_disruption_budget(manifest)
        name = app_meta.trim_name(pdb.name)
        name_camel = to_lower_camel(name)

        values = Values()
        values.add(threshold_value(pdb.spec.max_unavailable), name_camel, "maxUnavailable")
        values.add(threshold_value(pdb.spec.min_available), name_camel, "minAvailable")

        body = app_meta.render_meta(manifest) + render_spec(
            name_camel, serialize_selector(pdb.spec.selector), app_meta.chart_name)
        values.add(True, name_camel, "enabled")
        return Template(name=name, data=wrap_enabled(name_camel, body), values=values)
