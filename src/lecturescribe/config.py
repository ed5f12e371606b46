"""Configuration loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigError
from .models import GenerationMode


def _default_store_path() -> Path:
    return Path.home() / ".lecturescribe" / "notes.json"


@dataclass
class Config:
    """Application configuration."""

    anthropic_api_key: str = ""
    openai_api_key: str = ""
    llm_provider: str = "claude"
    model: str = ""
    store_path: Path = field(default_factory=_default_store_path)
    mode: str = GenerationMode.FULL.value
    verbose: bool = False

    @property
    def default_model(self) -> str:
        if self.model:
            return self.model
        if self.llm_provider == "claude":
            return "claude-sonnet-4-20250514"
        return "gpt-4o"

    @property
    def generation_mode(self) -> GenerationMode:
        return GenerationMode(self.mode)

    def validate(self, require_llm: bool = False) -> None:
        """Validate configuration.

        API keys are only checked when ``require_llm`` is set, so commands
        that never call the text-generation service work without them.
        """
        if self.llm_provider not in ("claude", "openai"):
            raise ConfigError(
                f"Unknown LLM provider: {self.llm_provider}. Use 'claude' or 'openai'."
            )
        if self.mode not in {m.value for m in GenerationMode}:
            raise ConfigError(
                f"Unknown generation mode: {self.mode}. "
                "Use 'summary', 'full' or 'key-concepts'."
            )
        if not require_llm:
            return
        if self.llm_provider == "claude" and not self.anthropic_api_key:
            raise ConfigError(
                "ANTHROPIC_API_KEY is required when using Claude provider."
            )
        if self.llm_provider == "openai" and not self.openai_api_key:
            raise ConfigError(
                "OPENAI_API_KEY is required when using OpenAI provider."
            )


def load_config(
    store_path: Optional[str] = None,
    provider: Optional[str] = None,
    model: Optional[str] = None,
    mode: Optional[str] = None,
    verbose: bool = False,
    require_llm: bool = False,
) -> Config:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()

    store = store_path or os.getenv("LECTURESCRIBE_STORE")
    config = Config(
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        llm_provider=provider or os.getenv("LLM_PROVIDER", "claude"),
        model=model or os.getenv("LECTURESCRIBE_MODEL", ""),
        store_path=Path(store).expanduser() if store else _default_store_path(),
        mode=mode or os.getenv("LECTURESCRIBE_MODE", GenerationMode.FULL.value),
        verbose=verbose,
    )

    config.validate(require_llm=require_llm)
    return config
