from .json_handler import JsonHandler
from .yaml_handler import YamlHandler
from .document import build_store, load_document, load_store

__all__ = ["JsonHandler", "YamlHandler", "build_store", "load_document", "load_store"]
