"""Errors raised while generating a testnet."""


class ArtifactWriteError(OSError):
    """A directory or file of the output could not be created."""

    def __init__(self, operation: str, path: str, reason: str):
        super().__init__(f"Failed to {operation} {path}: {reason}")
        self.operation = operation
        self.path = path
        self.reason = reason


class OverlayAddressError(ValueError):
    """A persisted overlay address exists but cannot be parsed."""

    def __init__(self, path: str, content: str):
        super().__init__(f"Invalid overlay address in {path}: {content!r} (expected host:port)")
        self.path = path
        self.content = content
