from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MARKOV_", env_file=".env", extra="ignore", protected_namespaces=()
    )

    output_size: int = Field(default=200, ge=0)
    state_size: int = Field(default=2, ge=1)
    save_path: Path | None = None
    default_save_path: Path = Path("markov.bin")
    short_seed: Literal["reject", "match"] = "reject"
    model_path: Path | None = None
    api_key: str | None = None
    log_level: str = "WARNING"


settings = Settings()
