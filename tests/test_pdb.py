import io

import pytest
import yaml

from conftest import make_pdb
from gotmpl import render
from k8s2helm.core.errors import DecodeError
from k8s2helm.processors.pdb import (
    LabelSelector, LabelSelectorRequirement, PodDisruptionBudgetProcessor,
    decode_pod_disruption_budget, serialize_selector, threshold_value,
)

processor = PodDisruptionBudgetProcessor()


def _render_doc(template, values, helpers):
    return yaml.safe_load(render(template.data, values, helpers))


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("api_version,kind,expected", [
    ("policy/v1", "PodDisruptionBudget", True),
    ("policy/v1beta1", "PodDisruptionBudget", False),
    ("v1", "PodDisruptionBudget", False),
    ("policy/v1", "Deployment", False),
    ("apps/v1", "Deployment", False),
])
def test_match(api_version, kind, expected):
    manifest = make_pdb()
    manifest.update(apiVersion=api_version, kind=kind)
    assert processor.match(manifest) is expected


def test_process_not_applicable_returns_none(app_meta):
    manifest = {"apiVersion": "v1", "kind": "Service", "metadata": {"name": "svc"}}
    assert processor.process(app_meta, manifest) is None


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def test_decode_thresholds_and_selector():
    manifest = make_pdb(min_available=2, max_unavailable="50%", selector={
        "matchLabels": {"app": "web"},
        "matchExpressions": [{"key": "tier", "operator": "In", "values": ["a", "b"]}],
    })
    pdb = decode_pod_disruption_budget(manifest)
    assert pdb.name == "my-app-pdb"
    assert pdb.spec.min_available == 2
    assert pdb.spec.max_unavailable == "50%"
    assert pdb.spec.selector == LabelSelector(
        match_labels={"app": "web"},
        match_expressions=[LabelSelectorRequirement("tier", "In", ["a", "b"])],
    )


@pytest.mark.parametrize("spec,field", [
    ({"minAvailable": True}, "spec.minAvailable"),
    ({"maxUnavailable": 1.5}, "spec.maxUnavailable"),
    ({"selector": ["app"]}, "spec.selector"),
    ({"selector": {"matchLabels": {"app": 1}}}, "spec.selector.matchLabels.app"),
    ({"selector": {"matchExpressions": [{"key": "a"}]}}, "matchExpressions[0].operator"),
    ("oops", "spec"),
])
def test_decode_rejects_wrong_types(spec, field):
    manifest = make_pdb()
    manifest["spec"] = spec
    with pytest.raises(DecodeError) as exc:
        decode_pod_disruption_budget(manifest)
    assert "PodDisruptionBudget/my-app-pdb" in str(exc.value)
    assert field in str(exc.value)


def test_decode_does_not_mutate_input():
    manifest = make_pdb(min_available=1)
    snapshot = yaml.safe_dump(manifest)
    decode_pod_disruption_budget(manifest)
    assert yaml.safe_dump(manifest) == snapshot


def test_threshold_value():
    assert threshold_value(None) == ""
    assert threshold_value(1) == "1"
    assert threshold_value("50%") == "50%"


# ---------------------------------------------------------------------------
# Selector serialization
# ---------------------------------------------------------------------------

def test_serialize_selector_two_labels():
    text = serialize_selector(LabelSelector(match_labels={"tier": "web", "app": "shop"}))
    assert text == "    matchLabels:\n      app: shop\n      tier: web"
    assert yaml.safe_load("selector:\n" + text) == {
        "selector": {"matchLabels": {"app": "shop", "tier": "web"}}}


def test_serialize_selector_expressions_keep_match_labels_last():
    text = serialize_selector(LabelSelector(
        match_expressions=[LabelSelectorRequirement("tier", "Exists")]))
    assert text.splitlines() == [
        "    matchExpressions:",
        "    - key: tier",
        "      operator: Exists",
        "    matchLabels:",
    ]


def test_serialize_missing_selector():
    assert serialize_selector(None) == "    matchLabels:"


# ---------------------------------------------------------------------------
# Processing and rendering
# ---------------------------------------------------------------------------

def test_end_to_end_min_available(app_meta):
    template = processor.process(app_meta, make_pdb(min_available=2))
    assert template.name == "pdb"
    assert template.filename == "pdb.yaml"
    assert template.values == {
        "pdb": {"maxUnavailable": "", "minAvailable": "2", "enabled": True}}
    assert list(template.values["pdb"]) == ["maxUnavailable", "minAvailable", "enabled"]


def test_template_structure(app_meta):
    template = processor.process(app_meta, make_pdb())
    lines = template.data.splitlines()
    assert lines[0] == "{{ if .Values.pdb.enabled }}"
    assert lines[-1] == "{{ end }}"
    assert template.data.endswith("{{ end }}\n")
    assert "  {{ with .Values.pdb.minAvailable -}}" in lines
    assert "  {{ with .Values.pdb.maxUnavailable -}}" in lines
    assert lines.index("  minAvailable: {{ . }}") < lines.index("  maxUnavailable: {{ . }}")
    assert '    {{- include "my-app.selectorLabels" . | nindent 6 }}' in lines


def test_render_without_thresholds_keeps_only_selector(app_meta, helpers):
    template = processor.process(app_meta, make_pdb())
    doc = _render_doc(template, {"pdb": {"enabled": True, "minAvailable": "",
                                         "maxUnavailable": ""}}, helpers)
    assert doc["spec"] == {"selector": {"matchLabels": {
        "app": "web",
        "app.kubernetes.io/name": "my-app",
        "app.kubernetes.io/instance": "rel",
    }}}
    assert doc["kind"] == "PodDisruptionBudget"
    assert doc["apiVersion"] == "policy/v1"


def test_render_with_max_unavailable_override(app_meta, helpers):
    template = processor.process(app_meta, make_pdb(min_available=1))
    text = render(template.data, {"pdb": {"enabled": True, "minAvailable": "",
                                          "maxUnavailable": "50%"}}, helpers)
    assert "maxUnavailable: 50%" in text
    assert "minAvailable" not in text
    assert yaml.safe_load(text)["spec"]["maxUnavailable"] == "50%"


def test_render_defaults(app_meta, helpers):
    template = processor.process(app_meta, make_pdb(min_available=2))
    doc = _render_doc(template, template.values, helpers)
    assert doc["spec"]["minAvailable"] == 2
    assert "maxUnavailable" not in doc["spec"]


def test_render_both_thresholds(app_meta, helpers):
    template = processor.process(app_meta, make_pdb(min_available="25%", max_unavailable=1))
    doc = _render_doc(template, template.values, helpers)
    assert doc["spec"]["minAvailable"] == "25%"
    assert doc["spec"]["maxUnavailable"] == 1


def test_render_disabled_is_empty(app_meta, helpers):
    template = processor.process(app_meta, make_pdb(min_available=2))
    values = {"pdb": dict(template.values["pdb"], enabled=False)}
    assert render(template.data, values, helpers).strip() == ""


def test_render_selector_expressions(app_meta, helpers):
    manifest = make_pdb(selector={
        "matchExpressions": [{"key": "tier", "operator": "In", "values": ["web"]}]})
    template = processor.process(app_meta, manifest)
    doc = _render_doc(template, template.values, helpers)
    assert doc["spec"]["selector"] == {
        "matchExpressions": [{"key": "tier", "operator": "In", "values": ["web"]}],
        "matchLabels": {"app.kubernetes.io/name": "my-app",
                        "app.kubernetes.io/instance": "rel"},
    }


def test_process_is_idempotent(app_meta):
    manifest = make_pdb(max_unavailable="50%", labels={"tier": "web"})
    first = processor.process(app_meta, manifest)
    second = processor.process(app_meta, manifest)
    assert first.data == second.data
    assert first.values == second.values


def test_logical_name_is_camel_case(app_meta):
    template = processor.process(app_meta, make_pdb(name="my-app-web-pdb"))
    assert template.filename == "web-pdb.yaml"
    assert "webPdb" in template.values
    assert "{{ if .Values.webPdb.enabled }}" in template.data


def test_write_emits_text_verbatim(app_meta):
    template = processor.process(app_meta, make_pdb())
    sink = io.StringIO()
    template.write(sink)
    assert sink.getvalue() == template.data


def test_decode_error_surfaces_from_process(app_meta):
    manifest = make_pdb()
    manifest["spec"]["minAvailable"] = ["1"]
    with pytest.raises(DecodeError):
        processor.process(app_meta, manifest)


@pytest.mark.parametrize("metadata", [{}, {"name": ""}, {"namespace": "default"}])
def test_decode_rejects_missing_name(metadata):
    manifest = make_pdb()
    manifest["metadata"] = metadata
    with pytest.raises(DecodeError) as exc:
        decode_pod_disruption_budget(manifest)
    assert "metadata.name: must not be empty" in str(exc.value)


def test_decode_rejects_non_string_label_value():
    manifest = make_pdb(labels={"tier": 3})
    with pytest.raises(DecodeError) as exc:
        decode_pod_disruption_budget(manifest)
    assert "metadata.labels.tier" in str(exc.value)
