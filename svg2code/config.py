"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Code generation defaults
    default_package: str = "com.example.icons"
    default_accessor_name: str = "Icons"
    all_assets_property_name: str = "AllAssets"

    # Directory walk
    max_depth: int = 10
    temp_dir_prefix: str = "svg2code-"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "SVG2CODE_"}


settings = Settings()
