from typing import Any, Iterable, List, Tuple, Union

from warden.exceptions import InvalidPointerError
from warden.spec import FieldPointerProtocol

SEPARATOR = ":"


def _segments(path: str) -> Tuple[str, ...]:
    path = path.strip(SEPARATOR)
    if not path:
        return ()
    parts = tuple(path.split(SEPARATOR))
    for segment in parts:
        if not segment:
            raise InvalidPointerError(segment)
    return parts


class FieldPointer(FieldPointerProtocol):
    """
    Immutable builder for colon-delimited store paths.

    `F.database.host`, `F / "database" / "host"` and `F / "database:host"`
    all address the same field. Indexing adds exactly one segment, so
    `F.servers[0]` is "servers:0" while `F["a:b"]` is rejected.
    """

    __slots__ = ("_parts",)

    def __init__(self, path: Union[str, Iterable[str]] = ""):
        if isinstance(path, str):
            self._parts = _segments(path)
        else:
            self._parts = tuple(self._check(str(segment)) for segment in path)

    @staticmethod
    def _check(segment: str) -> str:
        if not segment or SEPARATOR in segment:
            raise InvalidPointerError(segment)
        return segment

    def _extend(self, parts: Tuple[str, ...]) -> "FieldPointer":
        if not parts:
            return self
        return FieldPointer(self._parts + parts)

    def __getattr__(self, name: str) -> "FieldPointer":
        # Keep copy/pickle dunder lookups and the unset slot from becoming segments
        if name.startswith("__") or name == "_parts":
            raise AttributeError(name)
        return self._extend((name,))

    def __getitem__(self, key: Union[str, int]) -> "FieldPointer":
        return self._extend((self._check(str(key)),))

    def _join(self, other: Union[str, "FieldPointerProtocol"]) -> "FieldPointer":
        if isinstance(other, FieldPointer):
            return self._extend(other._parts)
        return self._extend(_segments(str(other)))

    def __add__(self, other: Any) -> "FieldPointer":
        return self._join(other)

    def __radd__(self, other: Any) -> "FieldPointer":
        return FieldPointer(str(other))._join(self)

    def __truediv__(
        self, other: Union[str, "FieldPointerProtocol"]
    ) -> "FieldPointer":
        return self._join(other)

    @property
    def parts(self) -> List[str]:
        return list(self._parts)

    def __str__(self) -> str:
        return SEPARATOR.join(self._parts)

    def __repr__(self) -> str:
        return f"<F: '{self}'>" if self._parts else "<F: (root)>"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FieldPointer):
            return self._parts == other._parts
        return str(other) == str(self)

    def __hash__(self) -> int:
        return hash(str(self))


def split_path(path: Union[str, FieldPointerProtocol]) -> List[str]:
    """Splits a path into its segments. `"a:b:c"` -> `["a", "b", "c"]`."""
    return str(path).split(SEPARATOR)
