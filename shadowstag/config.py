"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Effect defaults
    CORNER_RADIUS: int = 8
    OFFSET_X: int = -20
    OFFSET_Y: int = -20
    SHADOW_ALPHA: int = 150
    SPREAD: int = 26
    BLUR: int = 5
    SHADOW_COLOR: str = "#000000"
    EXPAND_CANVAS: bool = True  # Grow the canvas so the shadow is not clipped

    # Limits
    MAX_CANVAS_PIXELS: int = 16384 * 16384  # Max output pixels after expansion
    MAX_OFFSET: int = 4096  # Max absolute shadow offset in pixels

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = {"env_prefix": "SHADOWSTAG_"}


settings = Settings()
