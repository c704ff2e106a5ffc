"""
Configuration for file managers.
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from runtime_files.filesystem.classification import (
    DEFAULT_CONFIG_EXTENSION,
    DEFAULT_MODULE_EXTENSION,
)


class StorageType(str, Enum):
    """Supported storage types."""

    LOCAL = "local"
    MEMORY = "memory"


class FileManagerConfig(BaseModel):
    """
    Configuration for a file manager.

    Example:
        ```python
        config = FileManagerConfig(root="./dist")

        config = FileManagerConfig.from_file("runtime-files.yaml")
        manager = get_file_manager(config)
        ```
    """

    model_config = {"extra": "forbid"}

    root: str = Field(
        default=".",
        description="Root location of the file tree",
    )

    storage: StorageType = Field(
        default=StorageType.LOCAL,
        description="Storage type backing the file manager",
    )

    module_extension: str = Field(
        default=DEFAULT_MODULE_EXTENSION,
        min_length=1,
        description="Extension of executable module files (without dot)",
    )

    config_extension: str = Field(
        default=DEFAULT_CONFIG_EXTENSION,
        min_length=1,
        description="Extension of segment configuration files (without dot)",
    )

    extra_content_types: dict[str, str] = Field(
        default_factory=dict,
        description="Content types by extension, overriding the mimetypes registry",
    )

    asset_patterns: list[str] = Field(
        default_factory=list,
        description="Default glob patterns for asset discovery",
    )

    @field_validator("module_extension", "config_extension", mode="before")
    @classmethod
    def normalize_extension(cls, v):
        """Strip the leading dot and lowercase extensions."""
        if isinstance(v, str):
            return v.strip().lstrip(".").lower()
        return v

    @field_validator("extra_content_types", mode="before")
    @classmethod
    def normalize_content_type_keys(cls, v):
        """Normalize extension keys like the extension fields."""
        if not v:
            return {}
        return {str(ext).strip().lstrip(".").lower(): ct for ext, ct in v.items()}

    @field_validator("root", mode="before")
    @classmethod
    def expand_root(cls, v):
        """Expand ``~`` in the root location."""
        if isinstance(v, Path):
            v = str(v)
        if isinstance(v, str):
            return os.path.expanduser(v)
        return v

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "FileManagerConfig":
        """
        Load configuration from a YAML or JSON file.

        File format (YAML):
            ```yaml
            root: ./dist
            storage: local
            module_extension: js
            asset_patterns:
              - "**/*.css"
              - "assets/**/*"
            ```

        Args:
            path: Path to configuration file

        Returns:
            Loaded FileManagerConfig instance

        Raises:
            FileNotFoundError: If the config file doesn't exist
        """
        path = Path(path).expanduser().resolve()

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text()

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif path.suffix == ".json":
            data = json.loads(content)
        else:
            # Try YAML first, then JSON
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError:
                data = json.loads(content)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict) -> "FileManagerConfig":
        """Create configuration from a dictionary."""
        return cls(**data)

    @classmethod
    def from_env(cls, prefix: str = "RUNTIME_FILES_") -> "FileManagerConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            RUNTIME_FILES_ROOT - Root location
            RUNTIME_FILES_STORAGE - Storage type (local, memory)
            RUNTIME_FILES_MODULE_EXTENSION - Module file extension
            RUNTIME_FILES_CONFIG_EXTENSION - Segment configuration extension
            RUNTIME_FILES_ASSET_PATTERNS - Comma-separated asset glob patterns

        Unset variables keep their defaults.

        Args:
            prefix: Environment variable prefix

        Returns:
            FileManagerConfig instance
        """
        data: dict = {}

        for key in ("root", "storage", "module_extension", "config_extension"):
            value = os.environ.get(f"{prefix}{key.upper()}")
            if value:
                data[key] = value

        patterns = os.environ.get(f"{prefix}ASSET_PATTERNS")
        if patterns:
            data["asset_patterns"] = [p.strip() for p in patterns.split(",") if p.strip()]

        return cls(**data)

    def to_dict(self) -> dict:
        """Export configuration to a dictionary."""
        data = {
            "root": self.root,
            "storage": self.storage.value,
            "module_extension": self.module_extension,
            "config_extension": self.config_extension,
        }

        if self.extra_content_types:
            data["extra_content_types"] = dict(self.extra_content_types)
        if self.asset_patterns:
            data["asset_patterns"] = list(self.asset_patterns)

        return data

    def save(self, path: Union[str, Path], format: str = "yaml") -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save to
            format: Output format ('yaml' or 'json')
        """
        path = Path(path).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()

        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False)
        else:
            content = json.dumps(data, indent=2)

        path.write_text(content)

    def __repr__(self) -> str:
        return (
            f"FileManagerConfig("
            f"root={self.root!r}, "
            f"storage={self.storage.value})"
        )
