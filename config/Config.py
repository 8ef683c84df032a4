# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-12
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=True)


@dataclass(frozen=True)
class Config:
    # OpenAI (chat + embeddings)
    openai_api_key: str
    openai_base_url: str
    openai_chat_model: str
    openai_embed_model: str

    # Relational store (accounts + retail records + serialized index)
    database_url: str

    # Tenant whose index the chat endpoint queries
    account_id: str

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # OpenAI
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",        # e.g. https://api.openai.com/v1
        "openai_chat_model": "OPENAI_CHAT_MODEL",
        "openai_embed_model": "OPENAI_EMBED_MODEL",

        # Database
        "database_url": "RETAIL_DATABASE_URL",

        # Tenant
        "account_id": "RETAIL_ACCOUNT_ID",
    }

    DEFAULTS = {
        "openai_chat_model": "gpt-4-turbo-preview",
        "openai_embed_model": "text-embedding-3-small",
        "database_url": "sqlite:///./retail.db",
        "account_id": "main-retail-index",
    }

    # Blank means "use the SDK default endpoint"
    OPTIONAL_FIELDS = ("openai_base_url",)

    OPENAI_ENV_VARS = (
        "OPENAI_API_KEY",
        "OPENAI_CHAT_MODEL",
    )

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: os.getenv(env_name, Config.DEFAULTS.get(field_name, ""))
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    def __post_init__(self):
        """
        Fail fast if any required config is missing.
        """
        missing_fields = [
            k for k, v in self.__dict__.items()
            if not v and k not in self.OPTIONAL_FIELDS
        ]

        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url or "(sdk default)",
            "openai_chat_model": self.openai_chat_model,
            "openai_embed_model": self.openai_embed_model,
            "database_url": self.database_url.split("@")[-1],
            "account_id": self.account_id,
        }
