"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="console", description="Logging format (console or json)"
    )

    # Adaptive splitting defaults
    default_grid_size: int = Field(
        default=8, ge=1, description="Density grid cells per axis"
    )
    default_convolution_iterations: int = Field(
        default=1, ge=0, description="Convolution passes per split"
    )

    # Debug output
    grid_plot_dir: str = Field(
        default="./grid-plots", description="Directory for density grid plots"
    )

    model_config = SettingsConfigDict(
        env_prefix="CONVTREE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
