"""Configuration operations for KeyCat."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.nodes import ScalarNode
from ruamel.yaml.representer import Representer

from keycat.catalog import KeyTypeCatalog
from keycat.defaults import get_default_config
from keycat.models import CatalogConfig, Config, LoggingConfig
from keycat.paths import get_config_file_path
from keycat.result import Failure, Result, Success
from keycat.types import KeyType, LogLevel

CONSOLE = Console()
logger = logging.getLogger(__name__)

yaml = YAML()
yaml.preserve_quotes = True
yaml.indent(mapping=2, sequence=4, offset=2)


def enum_representer(dumper: Representer, data: Enum) -> ScalarNode:
    """Convert enum to string YAML representation."""
    return dumper.represent_scalar("tag:yaml.org,2002:str", str(data.value))


yaml.representer.add_representer(KeyType, enum_representer)
yaml.representer.add_representer(LogLevel, enum_representer)

CONFIG_HEADER = (
    "# KeyCat: key size selection\n"
    "# The first acceptable size of every key type is its default.\n\n"
)


def create(config_dir: Path, force: bool = False) -> Result[Config, str]:
    """Create the configuration file with default values.

    Args:
    ----
        config_dir: Path to config directory
        force: If True, overwrite an existing configuration file.

    Returns:
    -------
        Result with Config object or error message

    """
    try:
        config_dir.mkdir(parents=True, exist_ok=True)

        config_file_path = get_config_file_path(config_dir)
        if force or not config_file_path.exists():
            _write_config_file(get_default_config(), config_file_path)
            CONSOLE.print(f"Created config at {config_file_path}")
        else:
            CONSOLE.print(f"Config already exists at {config_file_path}, skipping.")

        return init(config_dir)
    except OSError as e:
        return Failure(f"Failed to create configuration: {e!s}")


def init(config_dir: Path) -> Result[Config, str]:
    """Initialize a Config object from the existing configuration file.

    Args:
    ----
        config_dir: Path to config directory

    Returns:
    -------
        Result with Config object or error message

    """
    if not config_dir.is_dir():
        return Failure(f"Config directory does not exist: {config_dir}")

    config_file_path = get_config_file_path(config_dir)
    if not config_file_path.exists():
        return Failure(f"Configuration file not found: {config_file_path}")

    validation = _validate_yaml(config_file_path)
    if isinstance(validation, Failure):
        return Failure("Invalid configuration:\n" + "\n".join(validation.error))

    data = validation.value
    return Success(
        Config(
            config_path=config_dir,
            catalog=CatalogConfig.model_validate(data.get("catalog") or {}),
            logging=LoggingConfig.model_validate(data.get("logging") or {}),
        )
    )


def validate(config_dir: Path) -> Result[None, str]:
    """Validate the configuration file and print every problem found.

    Args:
    ----
        config_dir: Path to the configuration directory

    Returns:
    -------
        Result with None if the configuration is valid, or error message

    """
    config_file_path = get_config_file_path(config_dir)
    if not config_file_path.exists():
        CONSOLE.print(f"[bold red]Error:[/bold red] Configuration file not found: {config_file_path}")
        return Failure("Validation failed")

    validation = _validate_yaml(config_file_path)
    if isinstance(validation, Failure):
        CONSOLE.print("[bold red]Configuration validation failed:[/bold red]")
        for error in validation.error:
            CONSOLE.print(f"  - {error}")
        return Failure("Validation failed")

    CONSOLE.print("✅ Configuration is valid")
    return Success(None)


def apply(config: Config, catalog: KeyTypeCatalog) -> Result[dict[KeyType, int], list[str]]:
    """Select the configured key sizes in a catalogue.

    Every configured size is attempted. Rejected sizes are collected and
    returned together, and leave the corresponding selection unchanged.

    Args:
    ----
        config: Loaded configuration
        catalog: Catalogue to update

    Returns:
    -------
        Result with the resulting size selection, or the list of rejections

    """
    errors = []
    for identifier, size in config.catalog.key_sizes.items():
        result = catalog.set_current_size(identifier, size)
        if isinstance(result, Failure):
            errors.append(str(result.error))

    if errors:
        return Failure(errors)
    logger.debug(f"Applied key sizes from {get_config_file_path(config.config_path)}")
    return Success(catalog.snapshot())


def _validate_yaml(file_path: Path) -> Result[dict[str, Any], list[str]]:
    """Load a YAML file and validate it using Pydantic models."""
    try:
        with file_path.open(encoding="utf-8") as f:
            data = yaml.load(f) or {}
    except Exception as e:
        return Failure([f"Error reading {file_path}: {e!s}"])

    if not isinstance(data, dict):
        return Failure([f"Expected a mapping at the top level of {file_path}"])

    unknown = sorted(set(data) - {"catalog", "logging"})
    if unknown:
        return Failure([f"Unknown section: {name}" for name in unknown])

    try:
        CatalogConfig.model_validate(data.get("catalog") or {})
        LoggingConfig.model_validate(data.get("logging") or {})
    except ValidationError as e:
        return Failure([f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in json.loads(e.json())])
    return Success(data)


def _write_config_file(config_data: dict[str, Any], path: Path) -> None:
    """Write configuration dictionary to a YAML file with a header."""
    with path.open("w", encoding="utf-8") as f:
        f.write(CONFIG_HEADER)
        yaml.dump(config_data, f)
