"""Configuration management for Imaginator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the IMAGINATOR_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (IMAGINATOR_* prefix)
2. .env file in the project root
3. Default values defined in ImaginatorConfig

Example .env file:
    IMAGINATOR_API_KEY=sk-...
    IMAGINATOR_API_BASE_URL=https://api.openai.com/v1
    IMAGINATOR_IMAGE_SIZE=512x512
    IMAGINATOR_OUTPUTS_DIR=outputs

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from imaginator.core.config import config

    print(config.api_base_url)
    print(config.outputs_dir)

Credentials
-----------
The generation API key is never hard-coded.  It must be supplied through
IMAGINATOR_API_KEY (or the .env file).  An empty key is accepted at start-up
so the UI can render, but every generation request will then be rejected by
the remote API and surfaced to the user as a generation failure.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImaginatorConfig(BaseSettings):
    """Main configuration for Imaginator.

    Values are loaded from environment variables with the IMAGINATOR_ prefix,
    with fallback to defaults defined here.

    Attributes
    ----------
    Generation API:
        api_key : str
            Bearer credential for the image-generation API
        api_base_url : str
            Base URL of an OpenAI-compatible API (``/images/generations``
            is appended)
        image_size : str
            Requested image size as ``WxH``
        max_images : int
            Upper bound of the image-count selector (1-10)
        request_timeout : float | None
            Seconds before the generation request is abandoned
            (``None`` waits indefinitely)

    Editor:
        preview_max_size : int
            Longest edge of the live preview in pixels
        jpeg_quality : int
            JPEG quality used for downloads (1-95)

    Paths:
        outputs_dir : Path
            Directory that receives downloadable images

    UI Settings:
        server_name : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Examples
    --------
        >>> custom_config = ImaginatorConfig(
        ...     api_key="sk-test",
        ...     image_size="1024x1024",
        ...     max_images=2,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="IMAGINATOR_",
        case_sensitive=False,
    )

    # Generation API
    api_key: str = Field(
        default="",
        description="Bearer credential for the image-generation API",
    )
    api_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of an OpenAI-compatible image API",
    )
    image_size: str = Field(
        default="512x512",
        description="Requested image size (WxH)",
        pattern=r"^\d+x\d+$",
    )
    max_images: int = Field(
        default=4,
        description="Maximum number of images per request",
        ge=1,
        le=10,
    )
    request_timeout: float | None = Field(
        default=None,
        description="Generation request timeout in seconds (None = no timeout)",
        gt=0,
    )

    # Editor
    preview_max_size: int = Field(default=512, ge=64, le=4096)
    jpeg_quality: int = Field(default=92, ge=1, le=95)

    # Paths
    outputs_dir: Path = Field(
        default=Path("outputs"),
        description="Directory for downloadable images",
    )

    # UI settings
    server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the outputs directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.outputs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def generations_url(self) -> str:
        """Full URL of the image-generation endpoint."""
        return f"{self.api_base_url.rstrip('/')}/images/generations"


# Global configuration instance
# Loads values from environment variables (IMAGINATOR_* prefix) and .env file.
config = ImaginatorConfig()
