"""Shared fixtures: a pipeline wired to fake S3 and DynamoDB backends."""

import pytest

from image_variants.core.config import ServiceConfig
from image_variants.core.factories import PipelineFactory
from image_variants.testing.fakes import (
    FakeLogger,
    create_test_watermark,
    setup_test_environment,
    to_base64,
)

IMAGE_ID = "image_20240101_120000"


@pytest.fixture
def fake_backends():
    return setup_test_environment(bucket="test-bucket", table="test-posts")


@pytest.fixture
def config():
    return ServiceConfig(
        bucket_name="test-bucket",
        metadata_table="test-posts",
        timezone="UTC",
    )


@pytest.fixture
def logger():
    return FakeLogger()


@pytest.fixture
def pipeline(fake_backends, config, logger):
    s3_client, table = fake_backends
    pipeline = PipelineFactory.create_pipeline(
        config=config,
        s3_client=s3_client,
        metadata_table=table,
        logger=logger,
        id_factory=lambda: IMAGE_ID,
    )
    return pipeline


@pytest.fixture
def provisioned_pipeline(pipeline):
    pipeline.upload_watermark_asset(
        to_base64(create_test_watermark(), mime="image/png"), "logo"
    )
    return pipeline
