import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type

from warden.config import WardenConfig
from warden.exceptions import DocumentError
from warden.permissions import Permission, declare_permission
from warden.pointer import SEPARATOR
from warden.spec import DocumentHandlerProtocol
from warden.store import Store
from warden.values import normalize

from .json_handler import JsonHandler
from .yaml_handler import YamlHandler

log = logging.getLogger(__name__)


def default_handlers() -> List[DocumentHandlerProtocol]:
    return [JsonHandler(), YamlHandler()]


def load_document(
    path: Path, handlers: Optional[List[DocumentHandlerProtocol]] = None
) -> Dict[str, Any]:
    path = Path(path)
    for handler in handlers or default_handlers():
        if handler.match(path):
            log.debug(f"Loading {path} with {type(handler).__name__}")
            return handler.load(path)
    raise DocumentError(path, f"unsupported format '{path.suffix}'")


def _group_by_node(permissions: Mapping[str, Permission]) -> Dict[str, Dict[str, Permission]]:
    # "database:password" -> {"database": {"password": w}}; root node is ""
    grouped: Dict[str, Dict[str, Permission]] = {}
    for path, permission in permissions.items():
        node_path, _, key = path.rpartition(SEPARATOR)
        grouped.setdefault(node_path, {})[key] = permission
    return grouped


def _node_type(node_path: str, declared: Dict[str, Permission]) -> Type[Store]:
    if not declared:
        return Store
    name = "DocumentNode[" + (node_path or "<root>") + "]"
    node_type = type(name, (Store,), {})
    for key, permission in declared.items():
        declare_permission(node_type, key, permission)
    return node_type


def _build_node(
    data: Mapping,
    node_path: str,
    grouped: Dict[str, Dict[str, Permission]],
    policy: Permission,
) -> Store:
    node = _node_type(node_path, grouped.get(node_path, {}))(default_policy=policy)
    entries: Dict[str, Any] = {}
    for key, value in data.items():
        key = str(key)
        child_path = f"{node_path}{SEPARATOR}{key}" if node_path else key
        entries[key] = _build_value(value, child_path, grouped, policy)
    # The owner builds the tree, so fields land without permission checks
    node._fields.update(entries)
    return node


def _build_value(
    value: Any,
    path: str,
    grouped: Dict[str, Dict[str, Permission]],
    policy: Permission,
) -> Any:
    if isinstance(value, Mapping):
        return _build_node(value, path, grouped, policy)
    if isinstance(value, (list, tuple)):
        # List elements are addressed by index, e.g. "servers:0:password"
        return [
            _build_value(item, f"{path}{SEPARATOR}{index}", grouped, policy)
            for index, item in enumerate(value)
        ]
    return normalize(value)


def build_store(data: Mapping, config: Optional[WardenConfig] = None) -> Store:
    """
    Builds a store tree from plain data, declaring the configured permissions
    on a dedicated node type for every node path that has any.
    """
    config = config or WardenConfig()
    grouped = _group_by_node(config.permissions)
    return _build_node(data, "", grouped, config.default_policy)


def load_store(
    path: Path,
    config: Optional[WardenConfig] = None,
    handlers: Optional[List[DocumentHandlerProtocol]] = None,
) -> Store:
    return build_store(load_document(path, handlers), config)
