"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    knitcanvas_env: str = "development"
    knitcanvas_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Motif image assets (served by the frontend, read here for natural size)
    knitcanvas_asset_dir: str = "assets"

    # Placement engine
    knitcanvas_max_motifs: int = 4
    knitcanvas_collision_padding: float = 15.0
    knitcanvas_search_step: float = 10.0
    knitcanvas_search_max_steps: int = 400
    knitcanvas_duplicate_offset: float = 20.0
    knitcanvas_default_size_fraction: float = 1 / 3
    knitcanvas_stitch_size: float = 4.0
    knitcanvas_rotation_enabled: bool = False
    knitcanvas_drag_end_policy: str = "snap"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
