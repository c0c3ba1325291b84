#!/usr/bin/env python

# pylint: disable=redefined-outer-name

"""JsonBytes tests."""

from typing import TypedDict

import pytest

from docker_engine_client_async import (
    DecodeError,
    JsonBytes,
    SerializationError,
)


class TypingJsonBytesData(TypedDict):
    # pylint: disable=missing-class-docstring
    bytes: bytes
    json_bytes: JsonBytes


@pytest.fixture()
def json_bytes_data() -> TypingJsonBytesData:
    """Provides an JsonBytes instance."""
    _bytes = b'{"x":"1"}'
    return {"bytes": _bytes, "json_bytes": JsonBytes(_bytes)}


def test___init__(json_bytes_data: TypingJsonBytesData):
    """Test that an json_bytes can be instantiated."""
    json_bytes = json_bytes_data["json_bytes"]
    assert json_bytes
    assert json_bytes.bytes == json_bytes_data["bytes"]
    assert json_bytes.json == {"x": "1"}


@pytest.mark.parametrize("_bytes", [b"", b"{", b"not json", None])
def test___init___invalid(_bytes: bytes):
    """Test that invalid JSON is reported as a decode error."""
    with pytest.raises(DecodeError):
        JsonBytes(_bytes)


def test___bytes__(json_bytes_data: TypingJsonBytesData):
    """Test __bytes__ pass-through for different variants."""
    assert bytes(json_bytes_data["json_bytes"]) == json_bytes_data["bytes"]


def test___eq__(json_bytes_data: TypingJsonBytesData):
    """Test that equality is determined by JSON content, not formatting."""
    assert json_bytes_data["json_bytes"] == JsonBytes(b'{ "x": "1" }')
    assert json_bytes_data["json_bytes"] != JsonBytes(b'{"x": "2"}')
    assert hash(json_bytes_data["json_bytes"]) == hash(JsonBytes(b'{ "x": "1" }'))


def test___str__(json_bytes_data: TypingJsonBytesData):
    """Test __str__ pass-through for different variants."""
    string = str(json_bytes_data["json_bytes"])
    assert string
    assert "None" not in string


def test_clone(json_bytes_data: TypingJsonBytesData):
    """Test object cloning."""
    clone = json_bytes_data["json_bytes"].clone()
    assert clone is not json_bytes_data["json_bytes"]
    assert bytes(clone) == json_bytes_data["bytes"]
    assert str(clone) == str(json_bytes_data["json_bytes"])
    clone._set_json({})  # pylint: disable=protected-access
    assert bytes(clone) != json_bytes_data["bytes"]
    assert str(clone) != str(json_bytes_data["json_bytes"])


def test_from_json():
    """Test that JSON objects are canonicalized."""
    json_bytes = JsonBytes.from_json({"b": 1, "a": [True, None]})
    assert json_bytes.get_bytes() == b'{"a":[true,null],"b":1}'
    assert json_bytes.get_json() == {"a": [True, None], "b": 1}


def test_from_json_invalid():
    """Test that values that cannot be encoded are reported as serialization errors."""
    with pytest.raises(SerializationError):
        JsonBytes.from_json({"x": object()})


def test_get_bytes(json_bytes_data: TypingJsonBytesData):
    """Test raw bytes retrieval."""
    assert json_bytes_data["json_bytes"].get_bytes() == json_bytes_data["bytes"]


def test_get_json(json_bytes_data: TypingJsonBytesData):
    """Test that retrieved JSON cannot modify the instance."""
    json = json_bytes_data["json_bytes"].get_json()
    assert json == {"x": "1"}
    json["x"] = "2"
    assert json_bytes_data["json_bytes"].get_json() == {"x": "1"}
