"""Application configuration using Pydantic settings."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        env_prefix="LABYRINTH_",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Labyrinth"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server address (Daedalus listens here, Icarus connects here)
    host: str = "127.0.0.1"
    port: int = Field(3001, gt=0, lt=65536)

    # Maze dimensions
    width: int = Field(15, gt=0)
    height: int = Field(10, gt=0)

    # Solver
    times: int = Field(10, ge=0)  # number of solve attempts
    max_moves: Optional[int] = None  # per attempt, None = unlimited
    request_timeout_seconds: float = Field(10.0, gt=0)

    # Seed for the process-wide random source, None = system entropy
    seed: Optional[int] = None

    @field_validator("max_moves")
    @classmethod
    def validate_max_moves(cls, v: Optional[int]) -> Optional[int]:
        """A move budget, when given, must be positive."""
        if v is not None and v <= 0:
            raise ValueError("max_moves must be positive")
        return v

    @model_validator(mode="after")
    def validate_area(self) -> "Settings":
        """Start and treasure need two distinct rooms."""
        if self.width * self.height < 2:
            raise ValueError("The maze needs at least two rooms (width x height >= 2)")
        return self

    @property
    def base_url(self) -> str:
        """URL Icarus uses to reach Daedalus."""
        return f"http://{self.host}:{self.port}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
