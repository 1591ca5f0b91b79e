"""Configuration loading for exportcov.

Package configuration is read from ``deno.json`` or ``deno.jsonc`` in the
project directory. Only the ``exports`` and ``workspace`` fields are used.
Both files may contain comments and trailing commas.
"""

from pathlib import Path

import commentjson

from exportcov.logger import logger

CONFIG_FILENAMES = ("deno.json", "deno.jsonc")


def load_config(config_path: Path) -> dict:
    """Load a deno.json or deno.jsonc configuration file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON(C) or its top-level
            value is not an object.
    """
    with open(config_path, "r", encoding="utf-8") as f:
        text = f.read()
    try:
        data = commentjson.loads(text)
    except Exception as e:
        raise ValueError(f"Failed to parse {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {config_path}")
    return data


def find_config(project_dir: Path) -> tuple[dict, Path] | None:
    """Find and load the first usable configuration file in a directory.

    A file that cannot be parsed is treated as absent and the next
    candidate is tried.
    """
    for filename in CONFIG_FILENAMES:
        config_path = project_dir / filename
        if not config_path.is_file():
            continue
        try:
            return load_config(config_path), config_path
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config", path=str(config_path), error=str(e))
    return None


def get_export_entries(config: dict) -> list[str]:
    """Get entry point paths from the ``exports`` field."""
    exports = config.get("exports")
    if isinstance(exports, str):
        return [exports]
    if isinstance(exports, dict):
        return [value for value in exports.values() if isinstance(value, str)]
    return []


def get_export_entry_path(config: dict) -> str | None:
    """Get the primary entry point: the string value or the first mapping value."""
    entries = get_export_entries(config)
    return entries[0] if entries else None


def has_exports_field(config: dict) -> bool:
    """Check if the config declares a non-empty ``exports`` field."""
    return bool(config.get("exports"))


def get_workspace_members(config: dict) -> list[str]:
    """Get workspace member paths from the ``workspace`` field."""
    members = config.get("workspace")
    if not isinstance(members, list):
        return []
    return [member for member in members if isinstance(member, str)]
