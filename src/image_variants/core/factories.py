"""Factory classes for creating configured service instances."""

from typing import Any, Callable, Dict, Optional

import boto3

from .config import ServiceConfig
from .observability import StructuredLogger
from .protocols import DynamoTableProtocol, LoggerProtocol, S3ClientProtocol
from .services import VariantPipeline
from .stores import DynamoDBMetadataStore, S3ArtifactStore


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(name: str = "image-variants", level: Optional[str] = None) -> LoggerProtocol:
        """Create a structured logger."""
        return StructuredLogger(name, level)


class AWSClientFactory:
    """Factory for creating boto3 clients and resources."""

    @staticmethod
    def _client_kwargs(config: ServiceConfig) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if config.aws_region:
            kwargs["region_name"] = config.aws_region
        if config.endpoint_url:
            kwargs["endpoint_url"] = config.endpoint_url
        return kwargs

    @staticmethod
    def create_s3_client(config: ServiceConfig) -> S3ClientProtocol:
        """Create S3 client for the artifact bucket."""
        session = boto3.Session()
        return session.client("s3", **AWSClientFactory._client_kwargs(config))  # type: ignore

    @staticmethod
    def create_metadata_table(config: ServiceConfig) -> DynamoTableProtocol:
        """Create DynamoDB Table resource for lineage records."""
        session = boto3.Session()
        dynamodb = session.resource("dynamodb", **AWSClientFactory._client_kwargs(config))
        return dynamodb.Table(config.metadata_table)  # type: ignore


class PipelineFactory:
    """Factory for creating the variant pipeline."""

    @staticmethod
    def create_pipeline(
        config: Optional[ServiceConfig] = None,
        s3_client: Optional[S3ClientProtocol] = None,
        metadata_table: Optional[DynamoTableProtocol] = None,
        logger: Optional[LoggerProtocol] = None,
        provision_watermark: bool = True,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> VariantPipeline:
        """
        Create a fully configured pipeline.

        When ``config.watermark_asset_path`` is set, the file is stored as the
        active watermark asset before the pipeline is returned.
        """
        if config is None:
            config = ServiceConfig.from_env()

        if logger is None:
            logger = LoggerFactory.create_logger()

        if s3_client is None:
            s3_client = AWSClientFactory.create_s3_client(config)

        if metadata_table is None:
            metadata_table = AWSClientFactory.create_metadata_table(config)

        pipeline = VariantPipeline(
            artifact_store=S3ArtifactStore(s3_client, config.bucket_name, logger),
            metadata_store=DynamoDBMetadataStore(metadata_table, logger),
            logger=logger,
            config=config,
            id_factory=id_factory,
        )

        if provision_watermark and config.watermark_asset_path:
            pipeline.provision_watermark_from_file(config.watermark_asset_path)
            logger.info(f"Watermark asset provisioned from {config.watermark_asset_path}")

        return pipeline
