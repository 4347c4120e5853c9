"""
Configuration management for the Home Energy Calculator.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOMEENERGY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Recommendation impact filter
    min_savings_dollars: float = Field(default=15.0, description="Keep a recommendation saving at least this many $/yr")
    min_savings_kg_co2: float = Field(default=25.0, description="...or at least this many kg CO2e/yr")
    max_recommendations: int = Field(default=6, ge=0, description="Number of recommendations returned")
    default_sort: Literal["cost", "co2"] = Field(default="cost", description="Recommendation ranking")

    # Logging
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=False)
    log_dir: Path = Field(default=Path("logs"))

    @property
    def log_file(self) -> Path:
        return self.log_dir / "homeenergy.log"


# Global settings instance
settings = Settings()
