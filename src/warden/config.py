import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

if sys.version_info < (3, 11):
    import tomli as tomllib
else:
    import tomllib

from .exceptions import ConfigError
from .permissions import Permission

log = logging.getLogger(__name__)


@dataclass
class WardenConfig:
    default_policy: Permission = Permission.READ_WRITE
    # Colon-delimited field path -> permission, e.g. "database:password" -> w
    permissions: Dict[str, Permission] = field(default_factory=dict)


def _find_pyproject_toml(search_path: Path) -> Path:
    current_dir = search_path.resolve()
    while True:
        pyproject_path = current_dir / "pyproject.toml"
        if pyproject_path.is_file():
            return pyproject_path
        if current_dir.parent == current_dir:
            break
        current_dir = current_dir.parent
    raise FileNotFoundError("Could not find pyproject.toml in any parent directory.")


def config_from_table(
    warden_data: Dict[str, Any], source: Path = Path("pyproject.toml")
) -> WardenConfig:
    table = warden_data.get("permissions", {})
    if not isinstance(table, dict):
        raise ConfigError(source, "[tool.warden.permissions] must be a table")
    permissions = {str(path): Permission.parse(value) for path, value in table.items()}
    return WardenConfig(
        default_policy=Permission.parse(warden_data.get("default_policy", "rw")),
        permissions=permissions,
    )


def load_config_from_path(search_path: Path) -> WardenConfig:
    """Finds the nearest pyproject.toml and loads its [tool.warden] table."""
    try:
        config_path = _find_pyproject_toml(search_path)
    except FileNotFoundError:
        log.debug(f"No pyproject.toml above {search_path}, using defaults")
        return WardenConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(config_path, f"invalid TOML ({e})") from e

    tool_data = data.get("tool", {})
    warden_data = tool_data.get("warden", {}) if isinstance(tool_data, dict) else {}
    if not isinstance(warden_data, dict):
        raise ConfigError(config_path, "[tool.warden] must be a table")

    log.debug(f"Loaded [tool.warden] from {config_path}")
    return config_from_table(warden_data, config_path)
