from pathlib import Path
from typing import Union


class WardenError(Exception):
    """Base class for all errors raised by warden."""

    pass


class PermissionDenied(WardenError):
    """Raised the moment a read or write hits a field the caller may not access."""

    def __init__(self, key: str, access: str):
        self.key = key
        self.access = access
        super().__init__(f"{access.capitalize()} access denied for key: {key}")


class UnknownPermissionError(WardenError, ValueError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Unknown permission {value!r}. "
            "Expected one of: r, w, rw, none, read-only, write-only, read-write."
        )


class DocumentError(WardenError):
    """Raised when a document file cannot be turned into a store."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not load document '{path}': {reason}")


class ConfigError(WardenError):
    """Raised when the [tool.warden] table cannot be read or has the wrong shape."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid warden config in '{path}': {reason}")


class InvalidPointerError(WardenError, ValueError):
    def __init__(self, segment: str):
        self.segment = segment
        super().__init__(
            f"Invalid path segment {segment!r}: segments must be non-empty "
            "and must not contain ':'."
        )
