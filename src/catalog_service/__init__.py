from .app import create_app
from .store import JsonFileStore

__all__ = ["create_app", "JsonFileStore"]
__version__ = "0.1.0"
