"""Application settings loaded from environment variables via pydantic-settings.

Two sources, in priority order:

  1. Environment variables, e.g. ``OPENAI_API_KEY=sk-abc123``.
  2. A ``.env`` file in the working directory (local development).

Field ``openai_api_key`` maps to env var ``OPENAI_API_KEY``.  Defaults apply
when neither source sets a field.  See ``.env.example`` for the full list.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from resume_ats.models.conversation import EvaluationPromptVariant


class Settings(BaseSettings):
    """Résumé evaluation service settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === OpenAI ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs
    openai_embedding_model: str = "text-embedding-3-small"
    openai_chat_model: str = "gpt-4"

    # === Vector store ===
    chromadb_persist_dir: str = "./data/chromadb"
    chromadb_collection: str = "resume_fragments"
    vector_dimension: int = 1536

    # === Profile lookup ===
    github_token: str = ""
    github_api_base_url: str = "https://api.github.com"
    # Attach GITHUB_TOKEN as a bearer credential to repository listings.
    use_authenticated_profile_lookup: bool = False

    # === Retrieval / generation ===
    evaluation_prompt_variant: EvaluationPromptVariant = EvaluationPromptVariant.ATS_REPORT
    chunk_size: int = 512
    chunk_overlap: int = 100
    retrieval_top_k: int = 10
    generation_temperature: float = 0.7

    # === App Config ===
    app_version: str = "0.1.0"
    app_host: str = "0.0.0.0"
    app_port: int = 3001
    app_env: str = "development"
    log_level: str = "INFO"
    # Comma-separated list; "*" allows every origin.
    cors_allowed_origins: str = "*"

    def get_cors_origins(self) -> list[str]:
        """Split ``cors_allowed_origins`` into a list, dropping blanks."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def get_github_token(self) -> str | None:
        """Return the GitHub token only when authenticated lookup is enabled."""
        if self.use_authenticated_profile_lookup and self.github_token:
            return self.github_token
        return None
