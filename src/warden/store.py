import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from .exceptions import PermissionDenied
from .permissions import Permission, registry
from .pointer import FieldPointer, split_path
from .spec import FieldPointerProtocol, StoreProtocol
from .values import MISSING, normalize, unwrap

log = logging.getLogger(__name__)

PathLike = Union[str, FieldPointerProtocol]


class Store(StoreProtocol):
    """
    A nested key-value node with per-field access control.

    Fields are addressed with colon-delimited paths ("database:host") that
    descend through child stores. Every hop is checked against the permission
    declared for (type(node), key), falling back to the node's default policy.
    """

    default_policy: Permission = Permission.READ_WRITE
    _field_defaults: Dict[str, Any] = {}

    def __init__(self, default_policy: Optional[Union[Permission, str]] = None):
        self._fields: Dict[str, Any] = {}
        if default_policy is not None:
            self.default_policy = Permission.parse(default_policy)

        for key, default in self._field_defaults.items():
            # Lazy defaults stay lazy; the rest is copied per instance
            if callable(default):
                self._fields[key] = default
            else:
                self._fields[key] = normalize(copy.deepcopy(default))

    # --- Permission queries ---

    def permission_for(self, key: str) -> Permission:
        declared = registry.declared_permission(type(self), key)
        if declared is not None:
            return declared
        return Permission.parse(self.default_policy)

    def allowed_to_read(self, key: str) -> bool:
        return self.permission_for(key).readable

    def allowed_to_write(self, key: str) -> bool:
        return self.permission_for(key).writable

    def _require_read(self, key: str) -> None:
        if not self.allowed_to_read(key):
            log.debug(f"Read denied on {type(self).__name__} for key '{key}'")
            raise PermissionDenied(key, "read")

    def _require_write(self, key: str) -> None:
        if not self.allowed_to_write(key):
            log.debug(f"Write denied on {type(self).__name__} for key '{key}'")
            raise PermissionDenied(key, "write")

    # --- Read ---

    def read(self, path: PathLike) -> Any:
        current: Any = self
        for key in split_path(path):
            if isinstance(current, Store):
                current._require_read(key)
            current = unwrap(_child(current, key))
        return current

    # --- Write ---

    def _new_child(self) -> "Store":
        return Store()

    def write(self, path: PathLike, value: Any) -> Any:
        value = unwrap(value)
        normalized = normalize(value)

        *parents, last = split_path(path)
        current = self
        for key in parents:
            current._require_write(key)
            child = current._new_child()
            log.debug(f"Created intermediate node '{key}'")
            current._fields[key] = child
            current = child

        current._require_write(last)
        current._fields[last] = normalized
        return value

    def put(self, path: PathLike, value: Any) -> Any:
        """
        Like `write`, but descends into existing child stores instead of
        replacing them, so sibling fields along the path survive.
        """
        value = unwrap(value)
        normalized = normalize(value)

        *parents, last = split_path(path)
        current = self
        for key in parents:
            current._require_write(key)
            child = current._fields.get(key, MISSING)
            if not isinstance(child, Store):
                child = current._new_child()
                log.debug(f"Created intermediate node '{key}'")
                current._fields[key] = child
            current = child

        current._require_write(last)
        current._fields[last] = normalized
        return value

    def write_entries(self, entries: Mapping) -> None:
        # Validate everything first so a denial leaves the node untouched
        for key in entries:
            self._require_write(str(key))
        for key, value in entries.items():
            self._fields[str(key)] = value

    # --- Enumeration ---

    def entries(self) -> Dict[str, Any]:
        return {
            key: unwrap(value)
            for key, value in self._fields.items()
            if self.allowed_to_read(key)
        }

    # --- Python protocol sugar ---

    def __getitem__(self, path: PathLike) -> Any:
        return self.read(path)

    def __setitem__(self, path: PathLike, value: Any) -> None:
        self.write(path, value)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, FieldPointer)):
            return False
        return self.read(path) is not MISSING

    def __repr__(self) -> str:
        keys = ", ".join(repr(k) for k in self._fields if self.allowed_to_read(k))
        return f"<{type(self).__name__} [{keys}]>"


def _child(container: Any, key: str) -> Any:
    if isinstance(container, Store):
        return container._fields.get(key, MISSING)
    if isinstance(container, Mapping):
        return container.get(key, MISSING)
    if isinstance(container, (list, tuple)) and key.isascii() and key.isdigit():
        index = int(key)
        return container[index] if index < len(container) else MISSING
    # Scalars, None and MISSING have no children
    return MISSING
