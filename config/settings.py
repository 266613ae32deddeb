"""Pydantic Settings for Context Keeper configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Context files
    project_root: Path = Field(default_factory=Path.cwd)
    context_dir_name: str = ".context"
    pattern_limit: int = Field(default=3, description="Patterns shown when no focus is given")

    # File cache
    cache_max_entries: int = 50
    cache_ttl_seconds: float = 600.0

    # Anthropic (only needed by the agent)
    anthropic_api_key: str = ""
    agent_model: str = "claude-sonnet-4-5-20250929"
    agent_max_tokens: int = 4096

    # Operational
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def context_dir(self) -> Path:
        return self.project_root / self.context_dir_name


settings = Settings()
