from .protocols import (
    FieldPointerProtocol,
    PermissionRegistryProtocol,
    StoreProtocol,
    DocumentHandlerProtocol,
)

__all__ = [
    "FieldPointerProtocol",
    "PermissionRegistryProtocol",
    "StoreProtocol",
    "DocumentHandlerProtocol",
]
