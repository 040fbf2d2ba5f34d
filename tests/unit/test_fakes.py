"""Tests for fake implementations to ensure they behave like boto3."""

import io

import pytest
from botocore.exceptions import ClientError
from PIL import Image

from image_variants.testing.fakes import (
    FakeDynamoTable,
    FakeS3Client,
    create_test_image,
    create_test_watermark,
)


class TestFakeS3Client:
    """Tests for FakeS3Client."""

    def test_put_then_get(self):
        client = FakeS3Client()
        client.create_bucket("b")

        client.put_object(Bucket="b", Key="k", Body=b"data", ContentType="image/png")
        response = client.get_object(Bucket="b", Key="k")

        assert response["Body"].read() == b"data"
        assert response["ContentType"] == "image/png"
        assert response["ContentLength"] == 4
        assert client.operation_count == 2

    def test_missing_key_raises_no_such_key(self):
        client = FakeS3Client()
        client.create_bucket("b")

        with pytest.raises(ClientError) as exc_info:
            client.get_object(Bucket="b", Key="missing")
        assert exc_info.value.response["Error"]["Code"] == "NoSuchKey"


class TestFakeDynamoTable:
    """Tests for FakeDynamoTable."""

    def test_get_missing_item_has_no_item_key(self):
        table = FakeDynamoTable()

        assert "Item" not in table.get_item(Key={"parent_id": "p", "record_key": "root"})

    def test_put_replaces_item(self):
        table = FakeDynamoTable()
        table.put_item(Item={"parent_id": "p", "record_key": "root", "Path": "a"})
        table.put_item(Item={"parent_id": "p", "record_key": "root", "Path": "b"})

        item = table.get_item(Key={"parent_id": "p", "record_key": "root"})["Item"]
        assert item["Path"] == "b"
        assert table.keys() == [("p", "root")]


def test_create_test_image_dimensions():
    image = Image.open(io.BytesIO(create_test_image(120, 80)))
    assert image.size == (120, 80)
    assert image.format == "JPEG"


def test_create_test_watermark_has_transparency():
    image = Image.open(io.BytesIO(create_test_watermark(40, 20)))
    assert image.mode == "RGBA"
    assert image.getpixel((0, 0))[3] == 0
    assert image.getpixel((0, 10))[3] == 255
