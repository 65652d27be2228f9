from typing import Any, Dict, List, Mapping


class _Missing:
    """Marker for an absent value. Distinct from None, which is JSON null."""

    _instance = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "<MISSING>"

    def __copy__(self) -> "_Missing":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_Missing":
        return self


MISSING: Any = _Missing()


def unwrap(value: Any) -> Any:
    """Materializes a lazy value by calling it once; anything else is returned as is."""
    from .store import Store

    if callable(value) and not isinstance(value, Store):
        return value()
    return value


def normalize(value: Any) -> Any:
    """
    Converts arbitrary nested input into the store's node representation.

    Mappings become fresh Store nodes, lists and tuples become lists of
    normalized elements, lazy values are materialized at every level and
    scalars pass through.
    """
    from .store import Store

    value = unwrap(value)

    if isinstance(value, Store):
        return value

    if isinstance(value, Mapping):
        node = Store()
        for key, item in value.items():
            node._fields[str(key)] = normalize(item)
        return node

    if isinstance(value, (list, tuple)):
        return [normalize(item) for item in value]

    return value


def to_plain(value: Any) -> Any:
    """
    Converts store nodes back into JSON-compatible data.

    Only visible entries are exported, so fields without read capability
    never leave the tree through this path.
    """
    from .store import Store

    value = unwrap(value)

    if isinstance(value, Store):
        return {key: to_plain(item) for key, item in value.entries().items()}

    if isinstance(value, Mapping):
        return {str(key): to_plain(item) for key, item in value.items()}

    if isinstance(value, (list, tuple)):
        items: List[Any] = [to_plain(item) for item in value]
        return items

    return value
