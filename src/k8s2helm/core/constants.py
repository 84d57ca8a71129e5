"""Constants and regexes used throughout the chart generator."""

import re

from k8s2helm.pacts.types import GroupVersionKind

PDB_GVK = GroupVersionKind("policy", "v1", "PodDisruptionBudget")

# Labels already produced by the "<chart>.labels" helper; not copied per object
STANDARD_LABELS = (
    "app.kubernetes.io/name", "app.kubernetes.io/instance",
    "app.kubernetes.io/version", "app.kubernetes.io/managed-by",
    "helm.sh/chart",
)

# Characters stripped from the front of a name once a prefix is removed
NAME_TRIM_CHARS = "-./"

# Helm chart names: lowercase alphanumerics and dashes
_CHART_NAME_INVALID_RE = re.compile(r'[^a-z0-9-]+')

# Fixed indent of the selector body and of the included selector labels
SELECTOR_INDENT = 4
SELECTOR_LABELS_INDENT = 6

VALUES_HEADER = "# Default values generated by k8s2helm — edit freely\n\n"
