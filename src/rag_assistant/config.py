"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # LLM
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for local vLLM)")
    llm_model_name: str = Field(default="gpt-3.5-turbo", description="Chat model identifier")
    llm_base_url: str = Field(
        default="",
        description=(
            "Base URL for an OpenAI-compatible API. Leave empty to use OpenAI cloud, "
            "e.g. 'http://llm-server.default.svc.cluster.local/v1'"
        ),
    )
    llm_temperature: float = 0.0
    max_tokens: int = Field(default=500, description="Output-length cap for generated answers")
    request_timeout: float = Field(default=60.0, description="Per-call timeout (seconds) for OpenAI clients")

    # Embedding
    embedding_provider: str = Field(default="openai", description="'openai' or 'huggingface'")
    embedding_model: str = "text-embedding-ada-002"
    embedding_dimension: int | None = Field(
        default=None,
        description="Expected vector length; vectors of any other length are rejected",
    )

    # Vector store
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "rag_assistant"
    chroma_distance: str = Field(default="cosine", description="cosine | l2 | ip")

    # Chunking / ingestion
    chunk_size: int = 1000
    overlap_size: int = 200
    min_chunk_size: int = 20
    batch_size: int = 10
    upload_dir: str = "uploads"

    # Retrieval
    top_k: int = 3

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    cors_origins: list[str] = Field(
        default=["*"],
        description='Origins allowed to call the API from a browser, e.g. \'["https://ui.example.com"]\'',
    )

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# Singleton — import `settings` wherever needed.
settings = Settings()
