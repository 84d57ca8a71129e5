"""Output writers — Chart.yaml, values.yaml, templates/."""

import os
import sys

import yaml

from k8s2helm.core.constants import VALUES_HEADER

_HELPERS_TPL = """\
{{/*
Expand the name of the chart.
*/}}
{{- define "<CHART>.name" -}}
{{- default .Chart.Name .Values.nameOverride | trunc 63 | trimSuffix "-" }}
{{- end }}

{{/*
Create a default fully qualified app name, truncated to 63 chars (DNS label limit).
*/}}
{{- define "<CHART>.fullname" -}}
{{- if .Values.fullnameOverride }}
{{- .Values.fullnameOverride | trunc 63 | trimSuffix "-" }}
{{- else }}
{{- $name := default .Chart.Name .Values.nameOverride }}
{{- if contains $name .Release.Name }}
{{- .Release.Name | trunc 63 | trimSuffix "-" }}
{{- else }}
{{- printf "%s-%s" .Release.Name $name | trunc 63 | trimSuffix "-" }}
{{- end }}
{{- end }}
{{- end }}

{{- define "<CHART>.chart" -}}
{{- printf "%s-%s" .Chart.Name .Chart.Version | replace "+" "_" | trunc 63 | trimSuffix "-" }}
{{- end }}

{{- define "<CHART>.labels" -}}
helm.sh/chart: {{ include "<CHART>.chart" . }}
{{ include "<CHART>.selectorLabels" . }}
{{- if .Chart.AppVersion }}
app.kubernetes.io/version: {{ .Chart.AppVersion | quote }}
{{- end }}
app.kubernetes.io/managed-by: {{ .Release.Service }}
{{- end }}

{{- define "<CHART>.selectorLabels" -}}
app.kubernetes.io/name: {{ include "<CHART>.name" . }}
app.kubernetes.io/instance: {{ .Release.Name }}
{{- end }}
"""


def render_helpers(chart_name: str) -> str:
    """Shared named templates every generated template includes."""
    return _HELPERS_TPL.replace("<CHART>", chart_name)


def write_chart_yaml(chart_dir: str, chart_name: str) -> None:
    """Write Chart.yaml unless one already exists (it may carry user edits)."""
    path = os.path.join(chart_dir, "Chart.yaml")
    if os.path.exists(path):
        return
    chart = {
        "apiVersion": "v2",
        "name": chart_name,
        "description": "A Helm chart generated by k8s2helm",
        "type": "application",
        "version": "0.1.0",
        "appVersion": "0.1.0",
    }
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(chart, f, default_flow_style=False, sort_keys=False)
    print(f"Wrote {path}", file=sys.stderr)


def write_values(chart_dir: str, values: dict) -> None:
    """Write values.yaml."""
    path = os.path.join(chart_dir, "values.yaml")
    with open(path, "w", encoding="utf-8") as f:
        f.write(VALUES_HEADER)
        yaml.dump(dict(values), f, default_flow_style=False, sort_keys=False)
    print(f"Wrote {path}", file=sys.stderr)


def write_templates(chart_dir: str, chart_name: str, templates: list) -> None:
    """Write _helpers.tpl and one file per processed resource."""
    templates_dir = os.path.join(chart_dir, "templates")
    os.makedirs(templates_dir, exist_ok=True)
    with open(os.path.join(templates_dir, "_helpers.tpl"), "w", encoding="utf-8") as f:
        f.write(render_helpers(chart_name))
    for template in templates:
        path = os.path.join(templates_dir, template.filename)
        with open(path, "w", encoding="utf-8") as f:
            template.write(f)
        print(f"Wrote {path}", file=sys.stderr)


def write_chart(chart_dir: str, chart_name: str, templates: list, values: dict) -> None:
    """Write the complete chart into *chart_dir*."""
    os.makedirs(chart_dir, exist_ok=True)
    write_chart_yaml(chart_dir, chart_name)
    write_values(chart_dir, values)
    write_templates(chart_dir, chart_name, templates)


def emit_warnings(warnings: list[str]) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)
