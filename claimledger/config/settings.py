"""Application settings."""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from CLAIMLEDGER_* environment variables or a .env file."""

    app_name: str = "Claim Ledger"
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Reject contract_type_create for an existing uuid instead of overwriting it
    strict_contract_types: bool = False

    # JSON array of {uuid, ...contract type} loaded through bootstrap at startup
    seed_contract_types: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_prefix="CLAIMLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
