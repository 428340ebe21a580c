"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.geometry import Rect


class Settings(BaseSettings):
    """Application settings pulled from ``MOSAIC_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MOSAIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (plain or json)")

    # Board Configuration
    canvas_width: int = Field(default=750, ge=50, description="Board surface width")
    canvas_height: int = Field(default=800, ge=50, description="Board surface height")
    canvas_margin: int = Field(default=20, ge=0, description="Margin around the partitioned area")
    disturbance_level: float = Field(
        default=0.12, ge=0.0, le=1.0, description="Perturbation strength of interior vertices"
    )
    device_pixel_ratio: float = Field(default=1.0, gt=0.0, description="Surface pixel ratio")
    default_seed: Optional[str] = Field(default=None, description="Seed for reproducible boards")

    # Interaction Configuration
    double_tap_window_ms: int = Field(
        default=300, ge=0, description="Max delay between taps of a double tap"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    @property
    def board_rect(self) -> Rect:
        """Partitioned area: the surface minus the margin on every side."""
        margin = self.canvas_margin
        return Rect(
            x=margin,
            y=margin,
            width=self.canvas_width - margin * 2,
            height=self.canvas_height - margin * 2,
        )


settings = Settings()
