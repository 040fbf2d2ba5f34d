"""Seams between the pipeline and its backends.

The Protocols describe the slice of boto3 and logger API the stores use; the
ABCs are the storage interfaces the pipeline is written against.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Protocol

from .exceptions import NotFoundError
from .models import ArtifactKind, ArtifactRecord, SizeLabel, StoredArtifact


class S3ClientProtocol(Protocol):
    """The two boto3 S3 client calls the artifact store makes."""

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]: ...

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str) -> Dict[str, Any]: ...


class DynamoTableProtocol(Protocol):
    """Protocol for the subset of a boto3 DynamoDB ``Table`` resource we use."""

    def put_item(self, Item: Dict[str, Any]) -> Dict[str, Any]:
        """Write an item, replacing any item with the same key."""
        ...

    def get_item(self, Key: Dict[str, Any]) -> Dict[str, Any]:
        """Read an item by its full primary key."""
        ...


class LoggerProtocol(Protocol):
    """Logger accepting an optional LogContext and extra fields."""

    def debug(self, message: str, context: Any = None, **kwargs: Any) -> None: ...

    def info(self, message: str, context: Any = None, **kwargs: Any) -> None: ...

    def warning(self, message: str, context: Any = None, **kwargs: Any) -> None: ...

    def error(self, message: str, context: Any = None, **kwargs: Any) -> None: ...


class ArtifactStore(ABC):
    """Binary object storage addressed by key."""

    @abstractmethod
    def put(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under ``key`` and return the stable storage path."""
        ...

    @abstractmethod
    def get(self, key: str) -> StoredArtifact:
        """Read bytes stored under ``key``; raises NotFoundError when missing."""
        ...


class MetadataStore(ABC):
    """Lineage records keyed by (parent id, kind, size label)."""

    @abstractmethod
    def put_record(self, record: ArtifactRecord) -> None:
        """Write a record, overwriting any record with the same identity."""
        ...

    @abstractmethod
    def get_record(
        self, parent_id: str, kind: ArtifactKind, size_label: Optional[SizeLabel] = None
    ) -> ArtifactRecord:
        """Read a record; raises NotFoundError when missing."""
        ...

    def has_record(
        self, parent_id: str, kind: ArtifactKind, size_label: Optional[SizeLabel] = None
    ) -> bool:
        try:
            self.get_record(parent_id, kind, size_label)
        except NotFoundError:
            return False
        return True
