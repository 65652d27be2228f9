from .exceptions import (
    WardenError,
    PermissionDenied,
    UnknownPermissionError,
    DocumentError,
    ConfigError,
    InvalidPointerError,
)
from .values import MISSING, unwrap, normalize, to_plain
from .permissions import (
    Permission,
    PermissionRegistry,
    registry,
    declare_permission,
    restrict,
)
from .pointer import F, FieldPointer
from .store import Store

__all__ = [
    "WardenError",
    "PermissionDenied",
    "UnknownPermissionError",
    "DocumentError",
    "ConfigError",
    "InvalidPointerError",
    "MISSING",
    "unwrap",
    "normalize",
    "to_plain",
    "Permission",
    "PermissionRegistry",
    "registry",
    "declare_permission",
    "restrict",
    "F",
    "FieldPointer",
    "Store",
]
