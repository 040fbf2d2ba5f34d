"""Shared data models for the image variants service."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

ROOT_COLLECTION = "posts"
ROOT_RECORD_KEY = "root"
WATERMARK_ASSET_PARENT = "watermark_assets"


class SizeLabel(str, Enum):
    """Fixed size variants an original can be derived into."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class ArtifactKind(str, Enum):
    """What produced an artifact."""

    ORIGINAL = "original"
    RESIZED = "resized"
    WATERMARKED = "watermarked"
    WATERMARK_ASSET = "watermark_asset"


def record_key_for(kind: ArtifactKind, size_label: Optional[SizeLabel] = None) -> str:
    """Sort key of a lineage record below its parent."""
    if kind is ArtifactKind.ORIGINAL:
        return ROOT_RECORD_KEY
    if kind is ArtifactKind.WATERMARK_ASSET:
        return ArtifactKind.WATERMARK_ASSET.value
    if size_label is None:
        raise ValueError(f"{kind.value} records need a size label")
    if kind is ArtifactKind.RESIZED:
        return f"resized_images/{size_label.value}"
    return f"watermarks/watermarked_{size_label.value}"


class ArtifactRecord(BaseModel):
    """One node of the lineage tree: original -> resized -> watermarked."""

    id: str
    parent_id: str
    kind: ArtifactKind
    size_label: Optional[SizeLabel] = None
    description: str = ""
    storage_path: str

    @property
    def record_key(self) -> str:
        return record_key_for(self.kind, self.size_label)

    @property
    def document_path(self) -> str:
        """Hierarchical path the record would have in a document store."""
        if self.kind is ArtifactKind.WATERMARK_ASSET:
            return f"{WATERMARK_ASSET_PARENT}/{self.id}"
        if self.kind is ArtifactKind.ORIGINAL:
            return f"{ROOT_COLLECTION}/{self.parent_id}"
        return f"{ROOT_COLLECTION}/{self.parent_id}/{self.record_key}"

    @classmethod
    def original(cls, image_id: str, storage_path: str) -> "ArtifactRecord":
        return cls(
            id=image_id,
            parent_id=image_id,
            kind=ArtifactKind.ORIGINAL,
            description="Image uploaded successfully!",
            storage_path=storage_path,
        )

    @classmethod
    def resized(
        cls, parent_id: str, size_label: SizeLabel, storage_path: str
    ) -> "ArtifactRecord":
        return cls(
            id=size_label.value,
            parent_id=parent_id,
            kind=ArtifactKind.RESIZED,
            size_label=size_label,
            description=f"Resized image ({size_label.value})",
            storage_path=storage_path,
        )

    @classmethod
    def watermarked(
        cls, parent_id: str, size_label: SizeLabel, storage_path: str
    ) -> "ArtifactRecord":
        return cls(
            id=f"watermarked_{size_label.value}",
            parent_id=parent_id,
            kind=ArtifactKind.WATERMARKED,
            size_label=size_label,
            description="Watermarked image",
            storage_path=storage_path,
        )

    @classmethod
    def watermark_asset(cls, name: str, storage_path: str) -> "ArtifactRecord":
        return cls(
            id=name,
            parent_id=f"{WATERMARK_ASSET_PARENT}/{name}",
            kind=ArtifactKind.WATERMARK_ASSET,
            description="Watermark image",
            storage_path=storage_path,
        )

    def to_item(self) -> Dict[str, Any]:
        """Serialize to a DynamoDB item."""
        item: Dict[str, Any] = {
            "parent_id": self.parent_id,
            "record_key": self.record_key,
            "ID": self.id,
            "Kind": self.kind.value,
            "Description": self.description,
            "Path": self.storage_path,
        }
        if self.size_label is not None:
            item["SizeLabel"] = self.size_label.value
        return item

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "ArtifactRecord":
        size_label = item.get("SizeLabel")
        return cls(
            id=item["ID"],
            parent_id=item["parent_id"],
            kind=ArtifactKind(item["Kind"]),
            size_label=SizeLabel(size_label) if size_label else None,
            description=item.get("Description", ""),
            storage_path=item["Path"],
        )


class StoredArtifact(BaseModel):
    """Bytes read back from the artifact store."""

    key: str
    body: bytes
    content_type: str = "application/octet-stream"


class OperationResult(BaseModel):
    """Outcome of one pipeline operation, returned to the caller."""

    status: str
    image_id: str = ""
    path: str = ""
    fallback_used: bool = False
    records: Dict[str, str] = Field(default_factory=dict)
