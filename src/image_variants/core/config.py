"""Service configuration loaded from the environment."""

import os
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .exceptions import ConfigurationError
from .models import SizeLabel


class TargetWidths(BaseModel):
    """Pixel widths for each size label."""

    small: int = Field(default=100, gt=0)
    medium: int = Field(default=500, gt=0)
    large: int = Field(default=1500, gt=0)

    def for_label(self, size_label: SizeLabel) -> int:
        return getattr(self, size_label.value)


class ServiceConfig(BaseModel):
    """Configuration for the image variants service."""

    bucket_name: str = "image-variants"
    metadata_table: str = "image-variants-posts"
    aws_region: Optional[str] = None
    endpoint_url: Optional[str] = None
    watermark_asset_name: str = "logo"
    watermark_asset_path: Optional[str] = None
    jpeg_quality: int = Field(default=75, ge=1, le=95)
    target_widths: TargetWidths = Field(default_factory=TargetWidths)
    watermark_alpha: float = Field(default=0.7, ge=0.0, le=1.0)
    watermark_width_fraction: float = Field(default=0.2, gt=0.0, le=1.0)
    timezone: str = "Asia/Kuala_Lumpur"
    host: str = "0.0.0.0"
    port: int = 5000
    static_dir: Optional[str] = None

    @field_validator("bucket_name", "metadata_table", "watermark_asset_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @property
    def watermark_asset_key(self) -> str:
        return watermark_asset_key(self.watermark_asset_name)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ServiceConfig":
        """
        Build a configuration from environment variables.

        Unset variables fall back to the field defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        mapping = {
            "bucket_name": "IMAGE_VARIANTS_BUCKET",
            "metadata_table": "IMAGE_VARIANTS_TABLE",
            "aws_region": "AWS_REGION",
            "endpoint_url": "IMAGE_VARIANTS_ENDPOINT_URL",
            "watermark_asset_name": "WATERMARK_ASSET_NAME",
            "watermark_asset_path": "WATERMARK_ASSET_PATH",
            "jpeg_quality": "JPEG_QUALITY",
            "watermark_alpha": "WATERMARK_ALPHA",
            "watermark_width_fraction": "WATERMARK_WIDTH_FRACTION",
            "timezone": "IMAGE_ID_TIMEZONE",
            "host": "HOST",
            "port": "LOCAL_SERVER_PORT",
            "static_dir": "STATIC_DIR",
        }
        values: Dict[str, object] = {
            field: env[var] for field, var in mapping.items() if env.get(var)
        }

        widths = {
            label.value: env[f"TARGET_WIDTH_{label.value.upper()}"]
            for label in SizeLabel
            if env.get(f"TARGET_WIDTH_{label.value.upper()}")
        }
        if widths:
            values["target_widths"] = widths

        try:
            return cls(**values)
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Invalid service configuration: {exc}") from exc


def watermark_asset_key(name: str) -> str:
    """Artifact key of a provisioned watermark image."""
    return f"watermark_assets/{name}.png"
