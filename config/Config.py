# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-08
# Updated: 2026-09-14
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

from common.Errors import ConfigurationError

# Load .env once globally (never override values already in the environment)
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # OpenAI (embeddings + chat completions)
    openai_api_key: str
    openai_base_url: str
    openai_chat_model: str
    openai_embed_model: str

    # Chroma Vector Database (cloud; leave blank for a local persistent client)
    chroma_api_key: str
    chroma_tenant: str
    chroma_database: str

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        # OpenAI
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://api.openai.com/v1
        "openai_chat_model": "OPENAI_CHAT_MODEL",
        "openai_embed_model": "OPENAI_EMBED_MODEL",

        # Chroma
        "chroma_api_key": "CHROMA_API_KEY",
        "chroma_tenant": "CHROMA_TENANT",
        "chroma_database": "CHROMA_DATABASE",
    }

    DEFAULTS = {
        "openai_chat_model": "gpt-4o",
        "openai_embed_model": "text-embedding-3-small",
    }

    # Convenient *groups* for use in tests / health checks
    EMBEDDING_FIELDS = ("openai_api_key", "openai_embed_model")
    CHAT_FIELDS = ("openai_api_key", "openai_chat_model")
    CHROMA_CLOUD_FIELDS = ("chroma_api_key", "chroma_tenant", "chroma_database")

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables."""
        kwargs = {
            field_name: (os.getenv(env_name) or Config.DEFAULTS.get(field_name, "")).strip()
            for field_name, env_name in Config.ENV_VARS.items()
        }
        return Config(**kwargs)

    def missing(self, *fields: str) -> list[str]:
        """Env var names for the given fields that resolved to empty values."""
        return [self.ENV_VARS[f] for f in fields if not getattr(self, f)]

    def require(self, *fields: str, purpose: str = "this operation") -> None:
        """
        Fail for the call that needs the config, not at construction.

        Search must keep working (via lexical fallback) when only some
        services are configured, so checks happen per use.
        """
        missing_env_vars = self.missing(*fields)
        if missing_env_vars:
            raise ConfigurationError(f"Configuration incomplete for {purpose}", missing_env_vars)

    @property
    def uses_chroma_cloud(self) -> bool:
        return bool(self.chroma_api_key)

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url,
            "openai_chat_model": self.openai_chat_model,
            "openai_embed_model": self.openai_embed_model,
            "openai_api_key_set": bool(self.openai_api_key),
            "chroma_cloud": self.uses_chroma_cloud,
            "chroma_tenant": self.chroma_tenant,
            "chroma_database": self.chroma_database,
        }
