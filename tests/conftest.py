import pytest

from k8s2helm.core.meta import AppMetadata

CHART = "my-app"

HELPERS = {
    f"{CHART}.fullname": "rel-my-app",
    f"{CHART}.labels": "helm.sh/chart: my-app-0.1.0\n"
                       "app.kubernetes.io/name: my-app\n"
                       "app.kubernetes.io/instance: rel",
    f"{CHART}.selectorLabels": "app.kubernetes.io/name: my-app\n"
                               "app.kubernetes.io/instance: rel",
}


def make_pdb(name="my-app-pdb", min_available=None, max_unavailable=None,
             selector=None, labels=None):
    spec = {}
    if min_available is not None:
        spec["minAvailable"] = min_available
    if max_unavailable is not None:
        spec["maxUnavailable"] = max_unavailable
    spec["selector"] = selector if selector is not None else {"matchLabels": {"app": "web"}}
    meta = {"name": name, "namespace": "default"}
    if labels:
        meta["labels"] = labels
    return {
        "apiVersion": "policy/v1",
        "kind": "PodDisruptionBudget",
        "metadata": meta,
        "spec": spec,
    }


@pytest.fixture
def app_meta():
    return AppMetadata(CHART, trim_prefix="my-app-")


@pytest.fixture
def helpers():
    return dict(HELPERS)
