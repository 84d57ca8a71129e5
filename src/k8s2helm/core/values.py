"""Chart values tree — default configuration collected from processed resources."""

from k8s2helm.core.errors import ConflictError


class Values(dict):
    """Nested, insertion-ordered mapping written out as values.yaml."""

    def add(self, value, *path: str):
        """Set *value* at *path*, creating intermediate mappings.

        Returns the value previously stored at *path* (None if there was none).
        Raises ConflictError instead of overwriting a leaf with a mapping or
        a mapping with a leaf.
        """
        if not path:
            raise ValueError("values path must not be empty")
        node: dict = self
        for i, key in enumerate(path[:-1]):
            child = node.setdefault(key, {})
            if not isinstance(child, dict):
                raise ConflictError(path[:i + 1], "value is not a mapping")
            node = child
        last = path[-1]
        previous = node.get(last)
        if isinstance(previous, dict) and not isinstance(value, dict):
            raise ConflictError(path, "refusing to replace a mapping")
        node[last] = value
        return previous

    def merge(self, other: dict) -> None:
        """Merge another values tree into this one.

        Equal leaves are fine; differing leaves or a leaf meeting a
        mapping mean two resources claimed the same key.
        """
        _merge_into(self, other, ())


def _merge_into(base: dict, other: dict, prefix: tuple) -> None:
    for key, val in other.items():
        path = prefix + (key,)
        if key not in base:
            base[key] = _copy(val)
            continue
        current = base[key]
        if isinstance(current, dict) and isinstance(val, dict):
            _merge_into(current, val, path)
        elif isinstance(current, dict) or isinstance(val, dict):
            raise ConflictError(path, "mapping and scalar collide")
        elif current != val:
            raise ConflictError(path, f"values {current!r} and {val!r} collide")


def _copy(val):
    if isinstance(val, dict):
        return {k: _copy(v) for k, v in val.items()}
    return val
