"""Pydantic configuration models for PeacePulse."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LLM_PROVIDERS = {"auto", "claude", "openai", "gemini"}
VALID_STRATEGIES = {"auto", "model", "rules"}


def _unit_interval(name: str, v: float) -> float:
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"{name} must be 0-1, got {v}")
    return v


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "auto"
    model: Optional[str] = None  # None = use provider default
    classifier_model: Optional[str] = None  # None = cheap tier of the provider
    api_key: Optional[str] = None
    temperature: float = 0.6
    top_p: float = 0.9
    max_tokens: int = 512

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        if v not in VALID_LLM_PROVIDERS:
            raise ValueError(f"Invalid LLM provider: {v}. Must be one of {VALID_LLM_PROVIDERS}")
        return v

    @field_validator("top_p")
    @classmethod
    def validate_top_p(cls, v: float) -> float:
        return _unit_interval("top_p", v)


class ClassifierConfig(BaseModel):
    """Stress / habit-intent classification."""

    strategy: str = "auto"
    classify_timeout: float = 10.0
    intent_timeout: float = 8.0
    confidence_threshold: float = 0.7
    max_activities: int = 5
    off_topic_filter: bool = True

    @field_validator("strategy")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        if v not in VALID_STRATEGIES:
            raise ValueError(f"Invalid classifier strategy: {v}. Must be one of {VALID_STRATEGIES}")
        return v

    @field_validator("confidence_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        return _unit_interval("confidence_threshold", v)

    @field_validator("classify_timeout", "intent_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v


class SimilarityConfig(BaseModel):
    """Habit-name dedup matching."""

    overlap_threshold: float = 0.7

    @field_validator("overlap_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        return _unit_interval("overlap_threshold", v)


class RepliesConfig(BaseModel):
    """Conversational reply generation."""

    timeout: float = 20.0
    max_attempts: int = 3
    min_wait: float = 1.0
    max_wait: float = 8.0
    seed: Optional[int] = None  # fixes the canned-reply choice


class PersistenceConfig(BaseModel):
    debounce_seconds: float = 0.1


class NotificationsConfig(BaseModel):
    ttl_seconds: float = 5.0


class PathsConfig(BaseModel):
    """File paths configuration."""

    db: Path = Path("~/.peacepulse/state.db")
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.db = self.db.expanduser()
        if self.log_file:
            self.log_file = self.log_file.expanduser()
        return self


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class PeacePulseConfig(BaseModel):
    """Main configuration model."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    similarity: SimilarityConfig = Field(default_factory=SimilarityConfig)
    replies: RepliesConfig = Field(default_factory=RepliesConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    notifications: NotificationsConfig = Field(default_factory=NotificationsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    seed_defaults: bool = True

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} patterns in the API key."""
        key = self.llm.api_key
        if key and key.startswith("${") and key.endswith("}"):
            self.llm.api_key = os.getenv(key[2:-1], "") or None
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "PeacePulseConfig":
        """Create config from a parsed YAML dict."""
        paths = data.get("paths")
        if isinstance(paths, dict):
            for key in ("db", "log_file"):
                if isinstance(paths.get(key), str):
                    paths[key] = Path(paths[key])
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
