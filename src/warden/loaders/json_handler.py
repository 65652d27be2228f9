import json
from pathlib import Path
from typing import Any, Dict

from warden.exceptions import DocumentError
from warden.spec import DocumentHandlerProtocol


class JsonHandler(DocumentHandlerProtocol):
    def match(self, path: Path) -> bool:
        return path.suffix.lower() == ".json"

    def load(self, path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DocumentError(path, f"invalid JSON ({e})") from e
        except OSError as e:
            raise DocumentError(path, str(e)) from e

        if not isinstance(data, dict):
            raise DocumentError(path, "top-level value must be an object")
        return data
