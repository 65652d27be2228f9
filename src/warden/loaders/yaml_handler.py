from pathlib import Path
from typing import Any, Dict

import yaml

from warden.exceptions import DocumentError
from warden.spec import DocumentHandlerProtocol


class YamlHandler(DocumentHandlerProtocol):
    def match(self, path: Path) -> bool:
        return path.suffix.lower() in (".yaml", ".yml")

    def load(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DocumentError(path, f"invalid YAML ({e})") from e
        except OSError as e:
            raise DocumentError(path, str(e)) from e

        # An empty file is an empty document
        if content is None:
            return {}
        if not isinstance(content, dict):
            raise DocumentError(path, "top-level value must be a mapping")

        # Only ensuring keys are strings
        return {str(k): v for k, v in content.items()}
