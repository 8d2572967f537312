"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_anon_key: str = ""

    # Backends
    store_backend: str = "supabase"  # "supabase" or "memory"
    storage_bucket: str = "printqueue"

    # HTTP
    api_port: int = 8001
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Uploads
    max_upload_mb: int = 10

    # Jobs list defaults
    default_filter: str = "all"
    default_sort: str = "newest"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
