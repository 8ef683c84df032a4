# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-30
# Description: test_config.py
# -----------------------------------------------------------------------------
import pytest

from config.Config import Config


@pytest.fixture
def clean_env(monkeypatch):
    for env_name in Config.ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
    return monkeypatch


def test_from_env_applies_defaults(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")

    cfg = Config.from_env()

    assert cfg.openai_api_key == "sk-test"
    assert cfg.openai_base_url == ""
    assert cfg.openai_chat_model == "gpt-4-turbo-preview"
    assert cfg.openai_embed_model == "text-embedding-3-small"
    assert cfg.database_url == "sqlite:///./retail.db"
    assert cfg.account_id == "main-retail-index"


def test_missing_api_key_fails_fast(clean_env):
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        Config.from_env()


def test_summary_hides_secrets(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-secret")
    clean_env.setenv("RETAIL_DATABASE_URL", "postgresql://user:pw@db.local:5432/retail")

    summary = Config.from_env().summary()

    assert "sk-secret" not in str(summary)
    assert summary["database_url"] == "db.local:5432/retail"
    assert summary["openai_base_url"] == "(sdk default)"
