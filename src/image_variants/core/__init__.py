"""Core utilities and shared components for the image variants service."""

from .config import ServiceConfig, TargetWidths
from .exceptions import (
    ConfigurationError,
    DecodeError,
    ImageVariantsError,
    NotFoundError,
    StoreWriteError,
    ValidationError,
    with_error_handling,
)
from .geometry import compute_grid_positions, compute_watermark_count
from .image_utils import (
    add_watermark,
    apply_transparency,
    decode_base64_image,
    decode_image,
    encode_image,
    resize_to_width,
)
from .logging_config import get_logger, setup_logger
from .models import ArtifactKind, ArtifactRecord, OperationResult, SizeLabel, StoredArtifact

__all__ = [
    "ServiceConfig",
    "TargetWidths",
    "ArtifactKind",
    "ArtifactRecord",
    "OperationResult",
    "SizeLabel",
    "StoredArtifact",
    "compute_grid_positions",
    "compute_watermark_count",
    "add_watermark",
    "apply_transparency",
    "decode_base64_image",
    "decode_image",
    "encode_image",
    "resize_to_width",
    "setup_logger",
    "get_logger",
    "ImageVariantsError",
    "DecodeError",
    "NotFoundError",
    "StoreWriteError",
    "ValidationError",
    "ConfigurationError",
    "with_error_handling",
]
