"""
Core configuration settings
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Basic settings
    app_name: str = "Clipshare"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]

    # Database
    database_url: str = "sqlite:///./clipshare.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30

    # Storage
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    upload_staging_dir: Optional[str] = None  # defaults to a hidden sibling of upload_dir
    max_upload_bytes: int = 200 * 1024 * 1024  # 200MB
    # Allowance for multipart framing and the text fields on top of the file
    upload_overhead_bytes: int = 1024 * 1024
    upload_chunk_size: int = 1024 * 1024

    # Auth
    bcrypt_rounds: int = 10


settings = Settings()
