#!/usr/bin/env python

# pylint: disable=missing-class-docstring,too-few-public-methods

"""Typing classes."""

from enum import IntEnum
from typing import Any, Dict, List, NamedTuple, Optional

from .exceptions import DecodeError

_MISSING = object()


def _get(json: Any, key: str, kind: type, *, default: Any = _MISSING) -> Any:
    """
    Retrieves a field from a JSON object, verifying its type.

    Args:
        json: The JSON object from which to retrieve the field.
        key: The (docker cased) name of the field.
        kind: The expected python type of the field value.
        default: Value returned when the field is absent or null; the field is required if omitted.

    Returns:
        The field value.
    """
    if not isinstance(json, dict):
        raise DecodeError(f"Expected a JSON object, not: {type(json).__name__}")
    value = json.get(key)
    if value is None:
        if default is _MISSING:
            raise DecodeError(f"Missing required field: {key}")
        return default
    # Note: bool is a subclass of int ...
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(
            f"Field {key} has type {type(value).__name__}, expected {kind.__name__}"
        )
    return value


def _parse_list(json: Any, parser) -> List:
    if not isinstance(json, list):
        raise DecodeError(f"Expected a JSON array, not: {type(json).__name__}")
    return [parser(item) for item in json]


class Ipam(NamedTuple):
    config: List[Dict[str, str]]
    driver: str
    options: Optional[Dict[str, str]]

    @staticmethod
    def parse(json: Any) -> "Ipam":
        return Ipam(
            config=_get(json, "Config", list, default=[]),
            driver=_get(json, "Driver", str),
            options=_get(json, "Options", dict, default=None),
        )


class NetworkContainerDetails(NamedTuple):
    endpoint_id: str
    ipv4_address: str
    ipv6_address: str
    mac_address: str
    name: Optional[str]

    @staticmethod
    def parse(json: Any) -> "NetworkContainerDetails":
        return NetworkContainerDetails(
            endpoint_id=_get(json, "EndpointID", str),
            ipv4_address=_get(json, "IPv4Address", str),
            ipv6_address=_get(json, "IPv6Address", str),
            mac_address=_get(json, "MacAddress", str),
            name=_get(json, "Name", str, default=None),
        )


class NetworkInfo(NamedTuple):
    """A network, as returned by the network list endpoint."""

    attachable: bool
    created: Optional[str]
    driver: str
    enable_ipv6: bool
    id: str
    ingress: Optional[bool]
    internal: bool
    ipam: Ipam
    labels: Optional[Dict[str, str]]
    name: str
    options: Optional[Dict[str, str]]
    scope: str

    @staticmethod
    def parse(json: Any) -> "NetworkInfo":
        return NetworkInfo(
            attachable=_get(json, "Attachable", bool),
            created=_get(json, "Created", str, default=None),
            driver=_get(json, "Driver", str),
            enable_ipv6=_get(json, "EnableIPv6", bool),
            id=_get(json, "Id", str),
            ingress=_get(json, "Ingress", bool, default=None),
            internal=_get(json, "Internal", bool),
            ipam=Ipam.parse(_get(json, "IPAM", dict)),
            labels=_get(json, "Labels", dict, default=None),
            name=_get(json, "Name", str),
            options=_get(json, "Options", dict, default=None),
            scope=_get(json, "Scope", str),
        )

    @staticmethod
    def parse_list(json: Any) -> List["NetworkInfo"]:
        return _parse_list(json, NetworkInfo.parse)


class NetworkDetails(NamedTuple):
    """A network, as returned by the network inspect endpoint."""

    attachable: bool
    containers: Dict[str, NetworkContainerDetails]
    created: Optional[str]
    driver: str
    enable_ipv6: bool
    id: str
    ingress: Optional[bool]
    internal: bool
    ipam: Ipam
    labels: Optional[Dict[str, str]]
    name: str
    options: Optional[Dict[str, str]]
    scope: str

    @staticmethod
    def parse(json: Any) -> "NetworkDetails":
        containers = _get(json, "Containers", dict, default={})
        return NetworkDetails(
            containers={
                key: NetworkContainerDetails.parse(value)
                for key, value in containers.items()
            },
            **NetworkInfo.parse(json)._asdict(),
        )


class NetworkCreateInfo(NamedTuple):
    id: str
    warning: str

    @staticmethod
    def parse(json: Any) -> "NetworkCreateInfo":
        return NetworkCreateInfo(
            id=_get(json, "Id", str), warning=_get(json, "Warning", str, default="")
        )


class NetworkEntry(NamedTuple):
    """A single network endpoint of a container."""

    aliases: Optional[List[str]]
    endpoint_id: str
    gateway: str
    global_ipv6_address: str
    global_ipv6_prefix_len: int
    ip_address: str
    ip_prefix_len: int
    ipv6_gateway: str
    mac_address: str
    network_id: str

    @staticmethod
    def parse(json: Any) -> "NetworkEntry":
        return NetworkEntry(
            aliases=_get(json, "Aliases", list, default=None),
            endpoint_id=_get(json, "EndpointID", str),
            gateway=_get(json, "Gateway", str),
            global_ipv6_address=_get(json, "GlobalIPv6Address", str),
            global_ipv6_prefix_len=_get(json, "GlobalIPv6PrefixLen", int),
            ip_address=_get(json, "IPAddress", str),
            ip_prefix_len=_get(json, "IPPrefixLen", int),
            ipv6_gateway=_get(json, "IPv6Gateway", str),
            mac_address=_get(json, "MacAddress", str),
            network_id=_get(json, "NetworkID", str),
        )


class NetworkSettings(NamedTuple):
    """The network settings of a container."""

    # Note: The top-level address fields are deprecated, and omitted by newer daemons.
    bridge: Optional[str]
    gateway: Optional[str]
    ip_address: Optional[str]
    ip_prefix_len: Optional[int]
    mac_address: Optional[str]
    networks: Dict[str, NetworkEntry]
    ports: Optional[Dict[str, Optional[List[Dict[str, str]]]]]

    @staticmethod
    def parse(json: Any) -> "NetworkSettings":
        networks = _get(json, "Networks", dict, default={})
        return NetworkSettings(
            bridge=_get(json, "Bridge", str, default=None),
            gateway=_get(json, "Gateway", str, default=None),
            ip_address=_get(json, "IPAddress", str, default=None),
            ip_prefix_len=_get(json, "IPPrefixLen", int, default=None),
            mac_address=_get(json, "MacAddress", str, default=None),
            networks={
                key: NetworkEntry.parse(value) for key, value in networks.items()
            },
            ports=_get(json, "Ports", dict, default=None),
        )


class StreamType(IntEnum):
    """Stream type discriminants of the multiplexed attach stream."""

    STDIN = 0
    STDOUT = 1
    STDERR = 2


class TtyChunk(NamedTuple):
    stream: StreamType
    data: bytes

    @staticmethod
    def stderr(data: bytes) -> "TtyChunk":
        return TtyChunk(stream=StreamType.STDERR, data=data)

    @staticmethod
    def stdin(data: bytes) -> "TtyChunk":
        return TtyChunk(stream=StreamType.STDIN, data=data)

    @staticmethod
    def stdout(data: bytes) -> "TtyChunk":
        return TtyChunk(stream=StreamType.STDOUT, data=data)


class UtilsChunksToFiles(NamedTuple):
    stderr_size: int
    stdout_size: int
