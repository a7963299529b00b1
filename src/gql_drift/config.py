import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gql_drift import log
from gql_drift.errors import ConfigError

CONFIG_FILES = (
    "gql-drift.config.json",
    "gql-drift.config.yaml",
    "gql-drift.config.yml",
)

DEFAULT_OUT_DIR = "generated"
DEFAULT_DEPTH = 1

ALL_TYPES = "*"


class DriftCliConfig(BaseModel):
    """Options of the ``generate`` command, from a config file and/or CLI flags.

    Args:
        endpoint: GraphQL endpoint URL for runtime introspection
        schema_path: Local SDL file or directory (alternative to the endpoint)
        types: Type names to generate, or "*" for every discovered object type
        exclude: Glob patterns removing types when ``types`` is "*"
        out: Output directory
        depth: Max nesting depth
        headers: HTTP headers for endpoint introspection
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    endpoint: str | None = None
    schema_path: str | None = Field(None, alias="schema")
    types: list[str] | Literal["*"] = Field(default_factory=list)
    exclude: list[str] | None = None
    out: str = DEFAULT_OUT_DIR
    depth: int = Field(DEFAULT_DEPTH, ge=0)
    headers: dict[str, str] = Field(default_factory=dict)


def _read_config(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def load_config_file(cwd: Path) -> dict[str, Any] | None:
    """
    Load the first gql-drift config file found in ``cwd``.

    JSON is preferred over YAML when both exist.

    Args:
        cwd: Directory to look in.

    Returns:
        The raw config values, or None when no config file exists.

    Raises:
        ConfigError: If the file cannot be parsed or is not a mapping.
    """
    for filename in CONFIG_FILES:
        path = cwd / filename
        if not path.exists():
            continue

        log.debug(f"Loading config file '{path}'")
        try:
            raw = _read_config(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Failed to parse {path}: expected a mapping at the top level")
        return raw

    log.debug(f"No config file found in '{cwd}'")
    return None


def merge_config(file_config: dict[str, Any] | None, cli_args: dict[str, Any]) -> DriftCliConfig:
    """
    Merge CLI arguments on top of config file values.

    CLI values win when set (not None). Headers merge per key with CLI values
    taking precedence.

    Raises:
        ConfigError: If the merged values do not validate.
    """
    merged: dict[str, Any] = dict(file_config or {})
    for key, value in cli_args.items():
        if key != "headers" and value is not None:
            merged[key] = value

    merged["headers"] = {**(merged.get("headers") or {}), **(cli_args.get("headers") or {})}

    try:
        return DriftCliConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid gql-drift configuration: {e}") from e
