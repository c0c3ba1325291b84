#!/usr/bin/env python

# pylint: disable=too-few-public-methods

"""Reusable string literals."""

DEFAULT_API_VERSION = "1.41"
DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"


class DockerEndpoints:
    """https://docs.docker.com/engine/api/v1.41/"""

    CONTAINER_ATTACH_PATTERN = "/containers/{0}/attach"
    CONTAINER_INSPECT_PATTERN = "/containers/{0}/json"
    NETWORKS = "/networks"
    NETWORK_ACTION_PATTERN = "/networks/{0}/{1}"
    NETWORK_CREATE = "/networks/create"
    NETWORK_PATTERN = "/networks/{0}"


class MediaTypes:
    """Generic and docker specific mime types."""

    APPLICATION_JSON = "application/json"
    APPLICATION_OCTET_STREAM = "application/octet-stream"
    DOCKER_MULTIPLEXED_STREAM = "application/vnd.docker.multiplexed-stream"
    DOCKER_RAW_STREAM = "application/vnd.docker.raw-stream"


class NetworkActions:
    """Path segments of the network connection endpoints."""

    CONNECT = "connect"
    DISCONNECT = "disconnect"


class NetworkDrivers:
    """https://docs.docker.com/network/#network-drivers"""

    BRIDGE = "bridge"
    HOST = "host"
    IPVLAN = "ipvlan"
    MACVLAN = "macvlan"
    NONE = "null"
    OVERLAY = "overlay"


class NetworkFilters:
    """https://docs.docker.com/engine/api/v1.41/#operation/NetworkList"""

    DANGLING = "dangling"
    DRIVER = "driver"
    ID = "id"
    LABEL = "label"
    NAME = "name"
    SCOPE = "scope"
    TYPE = "type"
