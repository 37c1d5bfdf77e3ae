"""Pydantic settings for citeproc.toml configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .environment import get_config_path, get_env, get_env_bool, load_environment_variables


class CitationSettings(BaseModel):
    """Citation generation settings."""

    style: str = "apa6"
    locale: str = "en-GB"
    target_field: str = "dc.identifier.citation"
    force: bool = False
    styles_dir: Path = Path("config/citation/csl")
    locales_dir: Path = Path("config/citation/locale")
    renderer_command: list[str] = Field(default_factory=list)
    renderer_timeout_s: float = 60.0

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable precedence for the renderer command and force flag."""
        load_environment_variables()
        env_command = get_env("CITEPROC_RENDERER")
        if env_command:
            data["renderer_command"] = env_command.split()
        data["force"] = get_env_bool("CITEPROC_FORCE", default=bool(data.get("force", False)))
        super().__init__(**data)

    @field_validator("styles_dir", "locales_dir", mode="before")
    @classmethod
    def validate_dir(cls, v: Any) -> Path:
        """Convert string to Path."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("renderer_command", mode="before")
    @classmethod
    def validate_command(cls, v: Any) -> list[str]:
        """Accept a single command string as well as an argument list."""
        if isinstance(v, str):
            return v.split()
        return v

    @field_validator("renderer_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"renderer_timeout_s must be positive, got {v}")
        return v


class Settings(BaseModel):
    """
    Main settings loaded from citeproc.toml.

    Example:
        [converter]
        date = "date"
        name = "name"

        [field]
        author = "dc.contributor.author(name)"
        issued = "dc.date.issued(date)"
        title = "dc.title"
    """

    converters: dict[str, str] = Field(default_factory=dict)
    fields: dict[str, str] = Field(default_factory=dict)
    citation: CitationSettings = Field(default_factory=CitationSettings)

    @classmethod
    def from_toml(cls, toml_path: Path | str | None = None) -> "Settings":
        """
        Load settings from a TOML file.

        Args:
            toml_path: Path to the configuration file; defaults to CITEPROC_CONFIG or citeproc.toml

        Returns:
            Settings instance (defaults if the file doesn't exist)
        """
        path = get_config_path(toml_path)
        if not path.exists():
            return cls()

        with path.open("rb") as f:
            data = tomllib.load(f)

        return cls(
            converters={str(k): str(v) for k, v in data.get("converter", {}).items()},
            fields={str(k): str(v) for k, v in data.get("field", {}).items()},
            citation=CitationSettings(**data.get("citation", {})),
        )

    def to_properties(self) -> dict[str, str]:
        """
        Flatten into the 'converter.<name>' / 'field.<outputField>' mapping the crosswalk consumes.

        Converter entries come first, then field entries in file order.
        """
        properties: dict[str, str] = {}
        for name, implementation in self.converters.items():
            properties[f"converter.{name}"] = implementation
        for output_field, value in self.fields.items():
            properties[f"field.{output_field}"] = value
        return properties
