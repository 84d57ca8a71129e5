"""Conversion orchestration — dispatch manifests to processors, merge their values."""

import fnmatch

from k8s2helm.core.errors import ConflictError, DecodeError
from k8s2helm.core.values import Values
from k8s2helm.pacts.helpers import full_name, object_name
from k8s2helm.processors.pdb import PodDisruptionBudgetProcessor

# Built-in processors, tried in order
PROCESSORS = [PodDisruptionBudgetProcessor()]


def _is_excluded(name: str, exclude_list: list[str]) -> bool:
    """Check if an object name matches any exclude pattern (supports wildcards)."""
    return any(fnmatch.fnmatch(name, pattern) for pattern in exclude_list)


def convert(manifests: list[dict], app_meta, exclude: list[str] | None = None,
            processors=None) -> tuple[list, Values, list[str]]:
    """Main conversion: returns (templates, values, warnings).

    A manifest that fails to decode is skipped with a warning. A values
    collision raises ConflictError, since the chart would be wrong.
    """
    processors = PROCESSORS if processors is None else processors
    exclude = exclude or []
    warnings: list[str] = []

    for m in manifests:
        app_meta.load(m)

    templates = []
    values = Values()
    # Values top-level key -> name of the object that claimed it
    owners: dict[str, str] = {}
    for m in manifests:
        name = object_name(m)
        if _is_excluded(name, exclude):
            continue
        processor = next((p for p in processors if p.match(m)), None)
        if processor is None:
            warnings.append(f"{full_name(m)}: no processor for "
                            f"{m.get('apiVersion', '?')}, skipped")
            continue
        try:
            template = processor.process(app_meta, m)
        except DecodeError as exc:
            warnings.append(f"skipping {exc}")
            continue
        if any(t.filename == template.filename for t in templates):
            raise ConflictError((template.name,), f"duplicate template '{template.filename}'")
        for key in template.values:
            owner = owners.setdefault(key, name)
            if owner != name:
                raise ConflictError(
                    (key,), f"{full_name(m)} and '{owner}' share the values key")
        values.merge(template.values)
        templates.append(template)
    return templates, values, warnings
