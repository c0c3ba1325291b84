#!/usr/bin/env python

"""An AIOHTTP based Python REST client for the Docker Engine."""

from .container import Container, Containers
from .dockerengineclientasync import DockerEngineClientAsync
from .exceptions import (
    ApiError,
    BadRequestError,
    ConflictError,
    DecodeError,
    DockerEngineClientError,
    ForbiddenError,
    NotFoundError,
    ProtocolViolation,
    SerializationError,
    ServerError,
    TransportError,
)
from .jsonbytes import JsonBytes
from .network import Network, Networks
from .options import (
    ContainerConnectionOptions,
    ContainerConnectionOptionsBuilder,
    NetworkCreateOptions,
    NetworkCreateOptionsBuilder,
    NetworkListOptions,
    NetworkListOptionsBuilder,
)
from .specs import DockerEndpoints, MediaTypes, NetworkActions, NetworkDrivers
from .ttymultiplexer import TtyChunkReader, TtyChunkWriter, TtyMultiplexer
from .typing import (
    Ipam,
    NetworkContainerDetails,
    NetworkCreateInfo,
    NetworkDetails,
    NetworkEntry,
    NetworkInfo,
    NetworkSettings,
    StreamType,
    TtyChunk,
)

__version__ = "0.1.0"
