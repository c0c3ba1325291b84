#!/usr/bin/env python

"""
JSON without canonicalization really bytes ;)
"""

import json

from copy import deepcopy

import canonicaljson

from .exceptions import DecodeError, SerializationError


class JsonBytes:
    """
    Base class to canonicalize JSON and track the bytes representation.
    """

    def __init__(self, _bytes: bytes):
        """
        Args:
            _bytes: The raw bytes value.
        """
        self.bytes = self.json = None
        self._set_bytes(_bytes)

    def __bytes__(self):
        return self.get_bytes()

    def __eq__(self, other):
        return isinstance(other, JsonBytes) and self.get_json() == other.get_json()

    def __hash__(self):
        return hash(canonicaljson.encode_canonical_json(self.json))

    def __repr__(self):
        return f"{self.__class__.__name__}({self.get_bytes()!r})"

    def __str__(self):
        return self.get_bytes().decode("utf-8")

    @classmethod
    def from_json(cls, _json):
        """
        Initializes an instance from a JSON object, canonicalizing the raw bytes.

        Args:
            _json: The JSON object.

        Returns:
            The newly initialized object.
        """
        obj = cls.__new__(cls)
        obj.bytes = obj.json = None
        obj._set_json(_json)  # pylint: disable=protected-access
        return obj

    def _set_bytes(self, _bytes: bytes):
        """
        Assigns the raw bytes and updates the internal JSON object.

        Args:
            _bytes: The raw bytes value.
        """
        try:
            json_ = json.loads(_bytes)
        except (TypeError, ValueError) as exception:
            raise DecodeError(f"Invalid JSON: {exception}") from exception
        self.bytes = _bytes
        self.json = json_

    def _set_json(self, _json):
        """
        Assigns the internal JSON object and updates the raw bytes value.

        Args:
            _json: The internal JSON object.
        """
        try:
            _bytes = canonicaljson.encode_canonical_json(_json)
        except (TypeError, ValueError) as exception:
            raise SerializationError(
                f"Unable to encode JSON: {exception}"
            ) from exception
        self.json = deepcopy(_json)
        self.bytes = _bytes

    def clone(self):
        """
        Initializes an returns a copy of this instance.

        Returns: A copy of this instance.
        """
        return deepcopy(self)

    def get_bytes(self) -> bytes:
        """
        Retrieves the raw bytes.

        Returns:
            The raw bytes.
        """
        return self.bytes

    def get_json(self):
        """
        Retrieves the raw bytes in JSON form.

        Returns:
            A copy of the JSON object.
        """
        return deepcopy(self.json)
