from pathlib import Path

import pytest

from lecturescribe import config as config_module
from lecturescribe.config import Config, load_config
from lecturescribe.exceptions import ConfigError
from lecturescribe.models import GenerationMode

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "LLM_PROVIDER",
    "LECTURESCRIBE_MODEL",
    "LECTURESCRIBE_STORE",
    "LECTURESCRIBE_MODE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *a, **kw: False)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()
    assert config.llm_provider == "claude"
    assert config.default_model == "claude-sonnet-4-20250514"
    assert config.generation_mode is GenerationMode.FULL
    assert config.store_path == Path.home() / ".lecturescribe" / "notes.json"


def test_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("LECTURESCRIBE_MODEL", "gpt-4.1")
    monkeypatch.setenv("LECTURESCRIBE_STORE", str(tmp_path / "s.json"))
    monkeypatch.setenv("LECTURESCRIBE_MODE", "key-concepts")
    config = load_config()
    assert config.llm_provider == "openai"
    assert config.default_model == "gpt-4.1"
    assert config.store_path == tmp_path / "s.json"
    assert config.generation_mode is GenerationMode.KEY_CONCEPTS


def test_cli_overrides_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("LLM_PROVIDER", "openai")
    monkeypatch.setenv("LECTURESCRIBE_MODE", "summary")
    config = load_config(
        store_path=str(tmp_path / "cli.json"), provider="claude", mode="full"
    )
    assert config.llm_provider == "claude"
    assert config.mode == "full"
    assert config.store_path == tmp_path / "cli.json"


def test_openai_default_model():
    assert Config(llm_provider="openai").default_model == "gpt-4o"


def test_unknown_provider():
    with pytest.raises(ConfigError, match="Unknown LLM provider"):
        load_config(provider="gemini")


def test_unknown_mode():
    with pytest.raises(ConfigError, match="Unknown generation mode"):
        load_config(mode="outline")


def test_keys_only_required_for_generation():
    load_config()
    with pytest.raises(ConfigError, match="ANTHROPIC_API_KEY"):
        load_config(require_llm=True)
    with pytest.raises(ConfigError, match="OPENAI_API_KEY"):
        load_config(provider="openai", require_llm=True)


def test_key_present(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
    config = load_config(require_llm=True)
    assert config.anthropic_api_key == "sk-test"
