"""
Field-level permissions and the process-wide registry they are declared in.

A permission is attached to a (store type, field name) pair when the store
type is defined, either with the `restrict` marker in the class body:

    class Credentials(Store):
        username = restrict("r", default="admin")
        password = restrict("w")
        token = restrict()          # no argument: "none"

or functionally with `declare_permission(Credentials, "password", "w")`.
Fields without a declaration fall back to the node's `default_policy`.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Union
from weakref import WeakKeyDictionary

from .exceptions import UnknownPermissionError
from .values import MISSING

log = logging.getLogger(__name__)


class Permission(str, Enum):
    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"
    NONE = "none"

    @property
    def readable(self) -> bool:
        return self in (Permission.READ, Permission.READ_WRITE)

    @property
    def writable(self) -> bool:
        return self in (Permission.WRITE, Permission.READ_WRITE)

    @classmethod
    def parse(cls, value: Union["Permission", str]) -> "Permission":
        if isinstance(value, Permission):
            return value
        if not isinstance(value, str):
            raise UnknownPermissionError(value)
        try:
            return _SPELLINGS[value.strip().lower()]
        except KeyError:
            raise UnknownPermissionError(value) from None


_SPELLINGS: Dict[str, Permission] = {
    "r": Permission.READ,
    "read-only": Permission.READ,
    "w": Permission.WRITE,
    "write-only": Permission.WRITE,
    "rw": Permission.READ_WRITE,
    "read-write": Permission.READ_WRITE,
    "none": Permission.NONE,
}


class PermissionRegistry:
    def __init__(self) -> None:
        self._declarations: "WeakKeyDictionary[type, Dict[str, Permission]]" = (
            WeakKeyDictionary()
        )

    def declare(
        self, owner: type, field_name: str, permission: Union[Permission, str]
    ) -> None:
        resolved = Permission.parse(permission)
        self._declarations.setdefault(owner, {})[field_name] = resolved
        log.debug(
            f"Declared '{resolved.value}' for {owner.__qualname__}.{field_name}"
        )

    def declared_permission(
        self, owner: type, field_name: str
    ) -> Optional[Permission]:
        # Nearest declaration in the MRO wins, mirroring attribute lookup.
        for klass in owner.__mro__:
            fields = self._declarations.get(klass)
            if fields is not None and field_name in fields:
                return fields[field_name]
        return None

    def declarations(self, owner: type) -> Dict[str, Permission]:
        merged: Dict[str, Permission] = {}
        for klass in reversed(owner.__mro__):
            merged.update(self._declarations.get(klass, {}))
        return merged


# The process-wide registry consulted by every Store
registry = PermissionRegistry()


def declare_permission(
    owner: type, field_name: str, permission: Union[Permission, str]
) -> None:
    registry.declare(owner, field_name, permission)


class restrict:
    """
    Class-body marker declaring the permission of a store field.

    Without arguments the field is declared `none`. An optional `default`
    becomes the field's initial value on each new instance.
    """

    def __init__(
        self,
        permission: Union[Permission, str] = Permission.NONE,
        default: Any = MISSING,
    ):
        self.permission = Permission.parse(permission)
        self.default = default

    def __set_name__(self, owner: type, name: str) -> None:
        registry.declare(owner, name, self.permission)
        if self.default is not MISSING:
            # Copy so a subclass never writes into its base's defaults
            defaults = dict(getattr(owner, "_field_defaults", {}))
            defaults[name] = self.default
            setattr(owner, "_field_defaults", defaults)
        # Field values live in the node, not on the class
        delattr(owner, name)

    def __repr__(self) -> str:
        return f"restrict({self.permission.value!r})"
