"""Public helper functions available to processors."""

import re

from k8s2helm.pacts.types import GroupVersionKind

_WORD_SPLIT_RE = re.compile(r'[^A-Za-z0-9]+')


def object_name(manifest: dict, default: str = "") -> str:
    """Return ``metadata.name``, or *default* when metadata is missing or malformed."""
    meta = manifest.get("metadata")
    if not isinstance(meta, dict) or meta.get("name") is None:
        return default
    return str(meta["name"])


def full_name(manifest: dict) -> str:
    """Return 'Kind/name' string for use in warning and error messages."""
    return f"{manifest.get('kind', '?')}/{object_name(manifest, '?')}"


def group_version_kind(manifest: dict) -> GroupVersionKind:
    """Split ``apiVersion`` + ``kind`` into a GroupVersionKind.

    Core objects have no group (``apiVersion: v1``).
    """
    api_version = str(manifest.get("apiVersion") or "")
    group, _, version = api_version.rpartition("/")
    return GroupVersionKind(group, version, str(manifest.get("kind") or ""))


def indent(text: str, n: int) -> str:
    """Prefix every line of *text* with *n* spaces (including after a trailing newline)."""
    if n < 0:
        return text
    prefix = " " * n
    return prefix + text.replace("\n", "\n" + prefix)


def to_lower_camel(name: str) -> str:
    """Turn a K8s object name into a values key: ``my-app.pdb`` → ``myAppPdb``."""
    words = [w for w in _WORD_SPLIT_RE.split(name) if w]
    if not words:
        return ""
    head = words[0][0].lower() + words[0][1:]
    return head + "".join(w[0].upper() + w[1:] for w in words[1:])
