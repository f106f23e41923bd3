"""Application configuration: settings schema, template rules and mdsync.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


CONFIG_FILE = "mdsync.yaml"


class Rule(BaseModel):
    """Template -> folder mapping. Accepts the persisted `Template/Folder/IncludeSubFolders` keys."""
    model_config = ConfigDict(populate_by_name=True)

    template:           str  = Field(...,           alias="Template",          description="Template document path")
    folder:             str  = Field(default="",    alias="Folder",            description="Folder to update; '' is the vault root")
    include_subfolders: bool = Field(default=False, alias="IncludeSubFolders", description="Descend into subfolders")


class Settings(BaseModel):
    vault_dir:  str        = Field(default=".",             description="Root directory of the document store")
    extensions: list[str]  = Field(default_factory=lambda: [".md"], description="Document file extensions")
    rules:      list[Rule] = Field(default_factory=list,    description="Template rules, run in order")

    @field_validator("extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [v for v in value.split(",") if v.strip()]
        if isinstance(value, list):
            return [v.strip() if v.strip().startswith(".") else f".{v.strip()}" for v in value]
        return value


def load_config(overrides: dict[str, Any] = None, path: Optional[Path] = None) -> Settings:
    """Load Settings from mdsync.yaml, then MDSYNC_<FIELD> env vars, then non-None CLI overrides."""
    config_path = Path(path) if path else Path(CONFIG_FILE)
    data: dict[str, Any] = {}
    if config_path.exists():
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {config_path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {config_path.name}: expected a mapping, got {type(data).__name__}")
    elif path:
        raise ValueError(f"Config file not found: {config_path}")

    for name in Settings.model_fields:
        if name == "rules":
            continue
        if val := os.getenv(f"MDSYNC_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
