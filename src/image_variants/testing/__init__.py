"""Testing utilities and fakes for the image variants service."""

from .fakes import (
    FakeDynamoTable,
    FakeLogger,
    FakeS3Client,
    S3Bucket,
    S3Object,
    create_test_image,
    create_test_watermark,
    setup_test_environment,
    to_base64,
)

__all__ = [
    "FakeDynamoTable",
    "FakeLogger",
    "FakeS3Client",
    "S3Bucket",
    "S3Object",
    "create_test_image",
    "create_test_watermark",
    "setup_test_environment",
    "to_base64",
]
