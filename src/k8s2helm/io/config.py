"""Configuration file — k8s2helm.yaml next to the generated chart.

Keys:
  chartName   chart name; empty means "use the chart directory name"
  trimPrefix  prefix cut from object names; null means "detect it"
  exclude     fnmatch patterns of object names to leave out of the chart
"""

import os
import sys

import yaml

CONFIG_FILENAME = "k8s2helm.yaml"
CONFIG_VERSION = "v1"

_HEADER = (
    "# k8s2helm settings, re-read on every run.\n"
    "# CLI flags --chart-name / --trim-prefix overwrite chartName / trimPrefix.\n\n"
)


def load_config(path: str) -> dict:
    """Load k8s2helm.yaml, filling defaults and dropping malformed exclude entries."""
    cfg: dict = {}
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    cfg.setdefault("k8s2helmVersion", CONFIG_VERSION)
    cfg["chartName"] = str(cfg.get("chartName") or "")
    if cfg.get("trimPrefix") is not None:
        cfg["trimPrefix"] = str(cfg["trimPrefix"])
    else:
        cfg["trimPrefix"] = None
    exclude = cfg.get("exclude") or []
    if not isinstance(exclude, list):
        exclude = [exclude]
    kept = [p for p in exclude if isinstance(p, str) and p]
    if len(kept) != len(exclude):
        print(f"⚠ {path}: ignoring non-string exclude entries", file=sys.stderr)
    cfg["exclude"] = kept
    return cfg


def save_config(path: str, config: dict) -> None:
    """Write k8s2helm.yaml, version key first."""
    ordered = {"k8s2helmVersion": config.get("k8s2helmVersion", CONFIG_VERSION)}
    ordered.update((k, v) for k, v in config.items() if k != "k8s2helmVersion")
    with open(path, "w", encoding="utf-8") as f:
        f.write(_HEADER)
        yaml.dump(ordered, f, default_flow_style=False, sort_keys=False)
