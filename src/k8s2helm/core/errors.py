"""Errors raised while turning manifests into chart templates."""


class DecodeError(ValueError):
    """A manifest does not match the schema its processor expects.

    Fatal for that one resource only: the dispatcher reports it and moves on.
    """

    def __init__(self, resource: str, message: str):
        super().__init__(f"{resource}: {message}")
        self.resource = resource


class ConflictError(ValueError):
    """A values path is already taken by an incompatible value.

    Two resources collapsing onto the same logical name end up here. The whole
    chart is unusable when this happens, so it aborts the run.
    """

    def __init__(self, path, message: str = "conflicting value"):
        self.path = tuple(path)
        super().__init__(f"{message} at '{'.'.join(self.path)}'")
