"""boto3-backed artifact and metadata stores."""

from typing import Optional

from .error_handling import translate_store_errors
from .exceptions import NotFoundError
from .models import ArtifactKind, ArtifactRecord, SizeLabel, StoredArtifact, record_key_for
from .protocols import (
    ArtifactStore,
    DynamoTableProtocol,
    LoggerProtocol,
    MetadataStore,
    S3ClientProtocol,
)


class S3ArtifactStore(ArtifactStore):
    """Artifacts stored as objects in a single S3 bucket."""

    def __init__(self, s3_client: S3ClientProtocol, bucket: str, logger: LoggerProtocol):
        self._s3_client = s3_client
        self._bucket = bucket
        self._logger = logger

    @property
    def bucket(self) -> str:
        return self._bucket

    @translate_store_errors("write")
    def put(self, key: str, data: bytes, content_type: str) -> str:
        self._logger.debug(f"Uploading {len(data)} bytes to s3://{self._bucket}/{key}")
        self._s3_client.put_object(
            Bucket=self._bucket, Key=key, Body=data, ContentType=content_type
        )
        return key

    @translate_store_errors("read")
    def get(self, key: str) -> StoredArtifact:
        self._logger.debug(f"Downloading s3://{self._bucket}/{key}")
        response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
        return StoredArtifact(
            key=key,
            body=response["Body"].read(),
            content_type=response.get("ContentType") or "application/octet-stream",
        )


class DynamoDBMetadataStore(MetadataStore):
    """
    Lineage records in one DynamoDB table.

    The table's partition key is ``parent_id`` and its sort key is
    ``record_key`` (``root``, ``resized_images/<size>`` or
    ``watermarks/watermarked_<size>``), which replaces the nested
    posts/<id>/<sub-collection>/<doc> layout of a document store.
    """

    def __init__(self, table: DynamoTableProtocol, logger: LoggerProtocol):
        self._table = table
        self._logger = logger

    @translate_store_errors("write")
    def put_record(self, record: ArtifactRecord) -> None:
        self._table.put_item(Item=record.to_item())
        self._logger.info(f"Lineage record saved: {record.document_path}")

    @translate_store_errors("read")
    def get_record(
        self, parent_id: str, kind: ArtifactKind, size_label: Optional[SizeLabel] = None
    ) -> ArtifactRecord:
        record_key = record_key_for(kind, size_label)
        response = self._table.get_item(
            Key={"parent_id": parent_id, "record_key": record_key}
        )
        item = response.get("Item")
        if not item:
            raise NotFoundError(f"No lineage record for {parent_id}/{record_key}")
        return ArtifactRecord.from_item(item)
