"""Configuration module for switchboard using pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from switchboard.agents.news import DEFAULT_NEWS_BASE_URL

AVAILABLE_AGENTS = ("calculator", "scratchpad", "translation", "news")


class SwitchboardSettings(BaseSettings):
    """Main configuration settings for switchboard.

    All settings can be overridden via environment variables with the
    SWITCHBOARD_ prefix. For example, SWITCHBOARD_OLLAMA_HOST will override
    the ollama_host setting.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Oracle
    ollama_host: str = "http://localhost:11434"
    model: str = "llama3.1:8b"
    translation_model: str | None = None

    # Turn bounds
    max_tool_iterations: int = Field(default=10, ge=1)
    turn_timeout_seconds: float = Field(default=120.0, gt=0)

    # History retention (None keeps every turn)
    history_max_turns: int | None = Field(default=None, ge=1)

    # Persona
    assistant_name: str = "Mei"
    user_name: str | None = None
    system_prompt_path: str | None = None

    # Agents
    enabled_agents: list[str] = Field(default_factory=lambda: list(AVAILABLE_AGENTS))
    data_dir: str = "."
    scratchpad_dir: str = "scratchpad"
    news_base_url: str = DEFAULT_NEWS_BASE_URL

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="SWITCHBOARD_")

    # --- Resolved paths (computed from data_dir + relative dirs) ---

    @property
    def resolved_scratchpad_dir(self) -> Path:
        """Get the full path to the scratchpad directory."""
        return Path(self.data_dir) / self.scratchpad_dir

    @property
    def resolved_system_prompt_path(self) -> Path | None:
        """Get the full path to the persona prompt file, if configured."""
        if self.system_prompt_path is None:
            return None
        return Path(self.data_dir) / self.system_prompt_path

    @property
    def resolved_translation_model(self) -> str:
        """Model used by the translation agent (defaults to the main model)."""
        return self.translation_model or self.model
