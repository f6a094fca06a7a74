"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDPOST_"


class Settings(BaseModel):
    app_name:      str = "mdpost"
    content_dir:   str = Field(default="_posts", description="Directory holding the posts")
    output_dir:    str = Field(default="_site",  description="Directory for rendered HTML/MD + JSON files")
    output_format: str = Field(default="html", pattern="^(html|md)$", description="html or md")
    parser_config: str = Field(
        default="gfm-like",
        pattern="^(commonmark|default|gfm-like|js-default|zero)$",
        description="MarkdownIt parser preset name",
    )
    required_keys: list[str] = Field(
        default_factory=lambda: ["layout", "title"],
        description="Front matter keys that must be non-empty strings",
    )


def _env_value(name: str, raw: str) -> Any:
    """List fields are comma-separated in the environment."""
    if name == "required_keys":
        return [k.strip() for k in raw.split(",") if k.strip()]
    return raw


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPOST_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = _env_value(name, val)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
