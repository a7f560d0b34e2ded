import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_PORT = 5000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_DATA_FILE = "db.json"


@dataclass(frozen=True)
class Settings:
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    data_file: str = DEFAULT_DATA_FILE
    env: str = "production"

    @property
    def development(self) -> bool:
        return self.env == "development"


def parse_port(value: Optional[str]) -> int:
    if value is None or value.strip() == "":
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {value!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"PORT out of range: {port}")
    return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        port=parse_port(env.get("PORT")),
        host=env.get("HOST", DEFAULT_HOST),
        data_file=env.get("CATALOG_DATA_FILE", DEFAULT_DATA_FILE),
        env=env.get("CATALOG_ENV", "production").strip().lower(),
    )
