"""Tests for ServiceConfig loading."""

import pytest

from image_variants.core.config import ServiceConfig, watermark_asset_key
from image_variants.core.exceptions import ConfigurationError
from image_variants.core.models import SizeLabel


class TestServiceConfig:
    """Tests for ServiceConfig defaults and environment loading."""

    def test_defaults(self):
        config = ServiceConfig()

        assert config.jpeg_quality == 75
        assert config.watermark_alpha == 0.7
        assert config.watermark_width_fraction == 0.2
        assert config.target_widths.for_label(SizeLabel.SMALL) == 100
        assert config.target_widths.for_label(SizeLabel.MEDIUM) == 500
        assert config.target_widths.for_label(SizeLabel.LARGE) == 1500
        assert config.port == 5000
        assert config.watermark_asset_key == "watermark_assets/logo.png"

    def test_from_env_empty_uses_defaults(self):
        assert ServiceConfig.from_env({}) == ServiceConfig()

    def test_from_env_overrides(self):
        config = ServiceConfig.from_env(
            {
                "IMAGE_VARIANTS_BUCKET": "photos",
                "IMAGE_VARIANTS_TABLE": "lineage",
                "JPEG_QUALITY": "90",
                "WATERMARK_ALPHA": "0.5",
                "TARGET_WIDTH_LARGE": "1200",
                "LOCAL_SERVER_PORT": "8080",
                "WATERMARK_ASSET_NAME": "brand",
                "STATIC_DIR": "/srv/static",
            }
        )

        assert config.bucket_name == "photos"
        assert config.metadata_table == "lineage"
        assert config.jpeg_quality == 90
        assert config.watermark_alpha == 0.5
        assert config.target_widths.large == 1200
        assert config.target_widths.small == 100
        assert config.port == 8080
        assert config.watermark_asset_key == "watermark_assets/brand.png"
        assert config.static_dir == "/srv/static"

    @pytest.mark.parametrize(
        "env",
        [
            {"JPEG_QUALITY": "high"},
            {"JPEG_QUALITY": "0"},
            {"WATERMARK_ALPHA": "1.5"},
            {"TARGET_WIDTH_SMALL": "-1"},
            {"IMAGE_VARIANTS_BUCKET": "   "},
        ],
    )
    def test_invalid_values_raise_configuration_error(self, env):
        with pytest.raises(ConfigurationError):
            ServiceConfig.from_env(env)

    def test_watermark_asset_key(self):
        assert watermark_asset_key("brand") == "watermark_assets/brand.png"
