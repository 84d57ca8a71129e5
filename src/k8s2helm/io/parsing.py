"""Manifest loading — YAML files, directories of YAML files, or a stream."""

import sys
from pathlib import Path

import yaml


def parse_stream(stream, source: str = "<stdin>") -> list[dict]:
    """Load every mapping document from a YAML stream.

    ``List`` objects (as printed by ``kubectl get -o yaml``) are flattened.
    """
    manifests: list[dict] = []
    try:
        for doc in yaml.safe_load_all(stream):
            if not doc or not isinstance(doc, dict):
                continue
            if doc.get("kind") == "List" and isinstance(doc.get("items"), list):
                manifests.extend(i for i in doc["items"] if isinstance(i, dict))
            else:
                manifests.append(doc)
    except yaml.YAMLError as exc:
        print(f"⚠ Skipping {source}: {exc.__class__.__name__}", file=sys.stderr)
    return manifests


def parse_manifests(paths: list[str]) -> list[dict]:
    """Load all manifests from the given files and directories, in sorted order."""
    manifests: list[dict] = []
    for path in paths:
        p = Path(path)
        if p.is_dir():
            files = sorted(f for f in p.rglob("*") if f.suffix in (".yaml", ".yml"))
        else:
            files = [p]
        for yaml_file in files:
            with open(yaml_file, encoding="utf-8") as f:
                manifests.extend(parse_stream(f, source=yaml_file.name))
    return manifests
