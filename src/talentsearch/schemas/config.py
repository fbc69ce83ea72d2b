"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..store.history import DEFAULT_DISPLAY_LIMIT, DEFAULT_RETENTION


class StorageConfig(BaseModel):
    backend: Literal["json", "memory"] = "json"
    path: Path | None = None


class HistoryConfig(BaseModel):
    retention: int = DEFAULT_RETENTION
    display_limit: int = DEFAULT_DISPLAY_LIMIT

    @field_validator("retention", "display_limit")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value


class AppConfig(BaseModel):
    storage: StorageConfig = Field(default_factory=StorageConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    seed_examples: bool = True
    log_level: str | None = None

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {
            "storage": self.storage.model_dump(mode="json", exclude_none=True),
            "history": self.history.model_dump(),
            "seed_examples": self.seed_examples,
        }
        if self.log_level:
            settings["log_level"] = self.log_level
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
