# tests/core/test_error_handling.py

import pytest
from botocore.exceptions import ClientError
from PIL import UnidentifiedImageError

from image_variants.core.exceptions import DecodeError, NotFoundError, StoreWriteError
from image_variants.core.error_handling import (
    translate_decode_errors,
    translate_store_errors,
)


def _client_error(code):
    return ClientError({'Error': {'Code': code, 'Message': 'test'}}, 'TestOperation')


# --- translate_store_errors ---

@pytest.mark.parametrize("code", ["NoSuchKey", "404", "ResourceNotFoundException"])
def test_read_missing_key_becomes_not_found(code):
    @translate_store_errors("read")
    def read():
        raise _client_error(code)

    with pytest.raises(NotFoundError) as exc_info:
        read()
    assert isinstance(exc_info.value.__cause__, ClientError)


def test_read_other_client_error_propagates():
    @translate_store_errors("read")
    def read():
        raise _client_error("AccessDenied")

    with pytest.raises(ClientError):
        read()


def test_write_client_error_becomes_store_write_error():
    @translate_store_errors("write")
    def write():
        raise _client_error("InternalError")

    with pytest.raises(StoreWriteError, match="write failed"):
        write()


def test_write_not_found_code_is_still_a_write_error():
    @translate_store_errors("write")
    def write():
        raise _client_error("NoSuchBucket")

    with pytest.raises(StoreWriteError):
        write()


def test_non_boto_errors_pass_through():
    @translate_store_errors("read")
    def read():
        raise KeyError("Body")

    with pytest.raises(KeyError):
        read()


def test_successful_call_returns_value():
    @translate_store_errors("read")
    def read():
        return b"data"

    assert read() == b"data"


# --- translate_decode_errors ---

def test_unidentified_image_becomes_decode_error():
    @translate_decode_errors
    def decode():
        raise UnidentifiedImageError("cannot identify image file")

    with pytest.raises(DecodeError, match="identify"):
        decode()


def test_truncated_image_becomes_decode_error():
    @translate_decode_errors
    def decode():
        raise OSError("image file is truncated")

    with pytest.raises(DecodeError, match="truncated"):
        decode()


def test_decode_error_passes_through():
    @translate_decode_errors
    def decode():
        raise DecodeError("already translated")

    with pytest.raises(DecodeError, match="already translated"):
        decode()
