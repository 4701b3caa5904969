"""Load omgraph settings from TOML (e.g. omgraph.toml).

Config file is looked up in order:
  1. Path in OMGRAPH_CONFIG env var (if set)
  2. omgraph.toml in the current working directory

Only the ``[omgraph]`` table is read. If no file is found, or a value has the
wrong type, built-in defaults are used.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

DEFAULT_VERSION = "0.1.0"
DEFAULT_TYPE_HASH_LENGTH = 8
DEFAULT_ADDRESS_PREFIX = "omg://"


class OmgraphConfig(BaseModel, frozen=True):
    """Settings shared by the compiler, materializer and in-memory store.

    Attributes:
        version: Format version stamped on every resource this package creates.
        type_hash_length: Hex digits of the schema-set identity appended to
            generated type names.
        address_prefix: Prefix of addresses issued by the in-memory store.
        log_level: Level name an application passes to ``setup_logging``;
            library modules only use ``logging.getLogger(__name__)``.
    """

    version: str = DEFAULT_VERSION
    type_hash_length: int = Field(default=DEFAULT_TYPE_HASH_LENGTH, ge=4, le=64)
    address_prefix: str = DEFAULT_ADDRESS_PREFIX
    log_level: str = "INFO"


def _default_config_paths() -> list[Path]:
    """Return paths to check for omgraph.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get("OMGRAPH_CONFIG"):
        paths.append(Path(os.environ["OMGRAPH_CONFIG"]))
    paths.append(Path.cwd() / "omgraph.toml")
    return paths


def load_config(path: Path | None = None) -> OmgraphConfig:
    """Load config from a TOML file.

    Args:
        path: Explicit file to read. When omitted, the default lookup order
            above is used.

    Returns:
        The parsed config. Keys that fail validation are dropped one by one
        so a single bad value does not discard the rest of the file.
    """
    candidates = [path] if path is not None else _default_config_paths()
    for candidate in candidates:
        if not candidate.is_file():
            continue
        try:
            with open(candidate, "rb") as f:
                data = tomllib.load(f)
        except (OSError, ValueError):
            continue
        section = data.get("omgraph")
        if not isinstance(section, dict):
            break
        return _validated(section)
    return OmgraphConfig()


def _validated(section: dict[str, Any]) -> OmgraphConfig:
    values = {k: v for k, v in section.items() if k in OmgraphConfig.model_fields}
    while True:
        try:
            return OmgraphConfig(**values)
        except ValidationError as e:
            bad = {err["loc"][0] for err in e.errors() if err["loc"]}
            if not bad:
                return OmgraphConfig()
            for key in bad:
                values.pop(key, None)
