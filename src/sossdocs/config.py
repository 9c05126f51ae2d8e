"""Configuration loader for documentation generation and validation.

Settings live in an optional ``soss_config.yaml`` file. Every field has a
default, so the tool runs without one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from . import context
from .exceptions import ConfigError

CONFIG_FILENAME = "soss_config.yaml"

EXAMPLE_ROLE = "http://www.w3.org/ns/dx/prof/role/example"


class SossConfig(BaseModel):
    """Settings shared by the generate and validate commands."""

    repository_url: str = "https://github.com/Language-Research-Technology/ro-crate-schema-tools"
    default_branch: str = "main"
    branch_env_vars: list[str] = Field(
        default_factory=lambda: ["GITHUB_REF_NAME", "CI_COMMIT_REF_NAME", "BRANCH_NAME"]
    )
    script_path: str = "src/sossdocs/cli.py"

    example_role: str = EXAMPLE_ROLE
    vocabulary_bases: list[str] = Field(default_factory=lambda: ["https://w3id.org/ldac/terms#"])
    root_class_names: list[str] = Field(
        default_factory=lambda: ["RootDataEntity", "Root Data Entity"]
    )

    # Type labels used to find each kind of profile entity
    class_type: str = "rdfs:Class"
    property_type: str = "rdf:Property"
    term_set_type: str = "DefinedTermSet"
    item_list_type: str = "ItemList"
    resource_descriptor_type: str = "ResourceDescriptor"

    default_profile_path: Path = Path("profiles/ro-crate/profile-crate/ro-crate-metadata.json")
    default_template_path: Path = Path("profiles/ro-crate/profile-text.md")
    output_filename: str = "profile-documentation.md"


def load_config(config_path: Path) -> SossConfig:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to soss_config.yaml

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file cannot be read or does not match the schema
    """
    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    if data is None:
        return SossConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the root level")

    try:
        return SossConfig(**data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e


def discover_config(
    profile_path: Path | None = None,
    config_path: Path | None = None,
) -> SossConfig:
    """Discover configuration from various locations.

    Search order:
    1. Explicit config_path argument
    2. Global context (set via CLI --config)
    3. profile directory / soss_config.yaml
    4. Current directory / soss_config.yaml
    5. Built-in defaults
    """
    # 1. Explicit argument
    if config_path:
        return load_config(config_path)

    # 2. Global context
    ctx_config = context.get_config_path()
    if ctx_config:
        return load_config(ctx_config)

    # 3. Profile directory
    if profile_path is not None:
        dir_config = Path(profile_path).parent / CONFIG_FILENAME
        if dir_config.exists():
            return load_config(dir_config)

    # 4. Current directory
    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return SossConfig()
