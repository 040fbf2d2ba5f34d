"""Tests for core data models."""

import pytest

from image_variants.core.models import (
    ArtifactKind,
    ArtifactRecord,
    OperationResult,
    SizeLabel,
    record_key_for,
)


class TestArtifactRecord:
    """Tests for ArtifactRecord lineage layout."""

    def test_original_record(self):
        record = ArtifactRecord.original("image_1", "image_1.jpg")

        assert record.parent_id == "image_1"
        assert record.kind is ArtifactKind.ORIGINAL
        assert record.size_label is None
        assert record.record_key == "root"
        assert record.document_path == "posts/image_1"

    def test_resized_record(self):
        record = ArtifactRecord.resized("image_1", SizeLabel.LARGE, "resized/large_image_1.jpg")

        assert record.id == "large"
        assert record.record_key == "resized_images/large"
        assert record.document_path == "posts/image_1/resized_images/large"

    def test_watermarked_record(self):
        record = ArtifactRecord.watermarked(
            "image_1", SizeLabel.MEDIUM, "watermarked/medium_watermarked_image_1.jpg"
        )

        assert record.id == "watermarked_medium"
        assert record.record_key == "watermarks/watermarked_medium"
        assert record.document_path == "posts/image_1/watermarks/watermarked_medium"
        assert record.description == "Watermarked image"

    def test_watermark_asset_record(self):
        record = ArtifactRecord.watermark_asset("logo", "watermark_assets/logo.png")

        assert record.document_path == "watermark_assets/logo"

    def test_item_round_trip(self):
        record = ArtifactRecord.resized("image_1", SizeLabel.SMALL, "resized/small_image_1.jpg")

        item = record.to_item()

        assert item["Path"] == "resized/small_image_1.jpg"
        assert item["parent_id"] == "image_1"
        assert item["record_key"] == "resized_images/small"
        assert ArtifactRecord.from_item(item) == record

    def test_derived_record_key_needs_size(self):
        with pytest.raises(ValueError, match="size label"):
            record_key_for(ArtifactKind.RESIZED)


class TestOperationResult:
    """Tests for OperationResult defaults."""

    def test_defaults(self):
        result = OperationResult(status="ok")

        assert result.image_id == ""
        assert result.fallback_used is False
        assert result.records == {}
