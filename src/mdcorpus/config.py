"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDCORPUS_"

DEFAULT_SENTINEL = "<!-- @@mdcorpus:document-boundary@@ -->"


class Settings(BaseModel):
    app_name:   str = "mdcorpus"
    sentinel:   str = Field(default=DEFAULT_SENTINEL, min_length=1, description="Exact token separating documents in one file")
    delimiter:  str = Field(default="---", min_length=1, description="Line that opens and closes a frontmatter block")
    cta_tags:   list[str] = Field(
        default_factory=lambda: ["swift", "functional-programming", "software-design"],
        description="Recognized call-to-action tags",
    )
    strict_cta: bool = Field(default=False, description="Treat unknown cta tags as build errors")
    source_suffixes: list[str] = Field(
        default_factory=lambda: [".js", ".jsx", ".ts", ".tsx"],
        description="File suffixes ingested as embedded source rather than articles",
    )
    output_dir:  str = Field(default="public/content", description="Directory for the published corpus")
    max_workers: Optional[int] = Field(default=None, ge=1, description="Per-file worker threads; None = executor default")
    log_level:   str = Field(default="INFO", description="Root log level")

    @field_validator("delimiter")
    @classmethod
    def _single_line(cls, v: str) -> str:
        if "\n" in v or not v.strip():
            raise ValueError("delimiter must be a single non-blank line")
        return v.strip()

    @field_validator("cta_tags", "source_suffixes", mode="before")
    @classmethod
    def _split_csv(cls, v: Any) -> Any:
        """Accept comma-separated strings (env vars) as lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("source_suffixes")
    @classmethod
    def _dotted(cls, v: list[str]) -> list[str]:
        return [s.lower() if s.startswith(".") else f".{s.lower()}" for s in v]


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDCORPUS_<FIELD> env vars, then non-None CLI overrides."""
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
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
