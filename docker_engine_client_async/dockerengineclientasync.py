#!/usr/bin/env python

"""Asynchronous Docker Engine Client."""

import asyncio
import json
import logging
import os

from http import HTTPStatus
from ssl import create_default_context, SSLContext
from typing import Any, Dict, Union
from urllib.parse import urlparse

from aiohttp import (
    AsyncResolver,
    ClientError,
    ClientResponse,
    ClientSession,
    Fingerprint,
    TCPConnector,
    UnixConnector,
)
from aiohttp.typedefs import LooseHeaders

from .container import Containers
from .exceptions import ApiError, TransportError
from .jsonbytes import JsonBytes
from .network import Networks
from .specs import DEFAULT_API_VERSION, DEFAULT_DOCKER_HOST, MediaTypes
from .ttymultiplexer import TtyMultiplexer

LOGGER = logging.getLogger(__name__)

TRANSPORT_ERRORS = (ClientError, OSError, asyncio.TimeoutError)


class DockerEngineClientAsync:
    # pylint: disable=too-many-instance-attributes
    """
    AIOHTTP based Python REST client for the Docker Engine.
    """

    DEBUG = os.environ.get("DECA_DEBUG", "")
    DEFAULT_API_VERSION = os.environ.get("DECA_API_VERSION", DEFAULT_API_VERSION)
    DEFAULT_DOCKER_HOST = os.environ.get("DOCKER_HOST", DEFAULT_DOCKER_HOST)

    def __init__(
        self,
        *,
        api_version: str = None,
        client_session: ClientSession = None,
        client_session_kwargs: Dict = None,
        docker_host: str = None,
        resolver_kwargs: Dict = None,
        ssl: Union[None, bool, Fingerprint, SSLContext] = None,
        tcp_connector_kwargs: Dict = None,
        **kwargs,
    ):
        # pylint: disable=unused-argument
        """
        Args:
            api_version: The docker engine API version to which requests are pinned.
            client_session: The underlying client session to use when making connections.
            client_session_kwargs: Arguments to be passed to the client session.
            docker_host: Address of the docker daemon; unix://<path>, tcp://<host>:<port>, or http[s]://<host>:<port>.
            resolver_kwargs: Arguments to be passed to the resolver
            ssl: SSL context.
            tcp_connector_kwargs: Arguments to be passed to the TCP connector.
        """
        if not api_version:
            api_version = DockerEngineClientAsync.DEFAULT_API_VERSION
        if not client_session_kwargs:
            client_session_kwargs = {}
        if not docker_host:
            docker_host = DockerEngineClientAsync.DEFAULT_DOCKER_HOST
        if not resolver_kwargs:
            resolver_kwargs = {}
        if not ssl:
            cacerts = os.environ.get("DECA_CACERTS", None)
            if cacerts:
                if DockerEngineClientAsync.DEBUG:
                    LOGGER.debug("Using cacerts: %s", cacerts)
                ssl = create_default_context(cafile=str(cacerts))
        if isinstance(ssl, SSLContext) and DockerEngineClientAsync.DEBUG:
            LOGGER.debug("SSL Context: %s", ssl.cert_store_stats())
        if not tcp_connector_kwargs:
            tcp_connector_kwargs = {}

        self.api_version = api_version.lstrip("v")
        self.client_session = client_session
        self.client_session_kwargs = client_session_kwargs
        self.docker_host = docker_host
        self.resolver_kwargs = resolver_kwargs
        self.ssl = ssl
        self.tcp_connector_kwargs = tcp_connector_kwargs
        self.base_url, self.socket_path = DockerEngineClientAsync._parse_docker_host(
            docker_host=docker_host, tls=bool(ssl)
        )

    async def __aenter__(self) -> "DockerEngineClientAsync":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def containers(self) -> Containers:
        """Interface for interacting with docker containers."""
        return Containers(self)

    @property
    def networks(self) -> Networks:
        """Interface for interacting with docker networks."""
        return Networks(self)

    async def close(self):
        """Gracefully closes this instance."""
        if self.client_session:
            await self.client_session.close()
        self.client_session = None

    @staticmethod
    def _parse_docker_host(*, docker_host: str, tls: bool = False):
        """
        Converts a docker host address to a base URL and an optional unix socket path.

        Args:
            docker_host: Address of the docker daemon.
            tls: If True, tcp:// addresses are mapped to https.

        Returns:
            The base URL and the unix socket path, or None.
        """
        parts = urlparse(docker_host)
        if parts.scheme == "unix":
            # Note: The host is ignored when dialing the socket; it only populates the "Host" header.
            return "http://localhost", parts.path
        if parts.scheme == "tcp":
            protocol = "https" if tls else "http"
            return f"{protocol}://{parts.netloc}", None
        if parts.scheme in ["http", "https"]:
            return f"{parts.scheme}://{parts.netloc}", None
        raise ValueError(f"Unsupported docker host: {docker_host}")

    async def _get_client_session(self) -> ClientSession:
        """
        Initializes and / or retrieves an AIOHTTP client session.

        Returns:
            The AIOHTTP client session.
        """
        if not self.client_session:
            # Note: Connectors are closed with their session, so one is created per session.
            client_session_kwargs = dict(self.client_session_kwargs)
            if "connector" not in client_session_kwargs:
                if self.socket_path:
                    connector = UnixConnector(path=self.socket_path)
                else:
                    tcp_connector_kwargs = dict(self.tcp_connector_kwargs)
                    if "resolver" not in tcp_connector_kwargs:
                        tcp_connector_kwargs["resolver"] = AsyncResolver(
                            **self.resolver_kwargs
                        )
                    if "ssl" not in tcp_connector_kwargs and self.ssl is not None:
                        tcp_connector_kwargs["ssl"] = self.ssl
                    connector = TCPConnector(**tcp_connector_kwargs)
                client_session_kwargs["connector"] = connector
            self.client_session = ClientSession(**client_session_kwargs)

        return self.client_session

    async def _get_request_headers(self, *, headers: LooseHeaders = None) -> LooseHeaders:
        """
        Generates request headers.

        Args:
            headers: Optional supplemental request headers to be returned.

        Returns:
            The generated request headers.
        """
        if not headers:
            headers = {}

        if "User-Agent" not in headers:
            # Note: This cannot be imported above, as it causes a circular import!
            from . import __version__  # pylint: disable=import-outside-toplevel

            headers["User-Agent"] = f"docker-engine-client-async/{__version__}"

        return headers

    def _get_url(self, path: str) -> str:
        """
        Converts a docker engine API path to a fully qualified, version pinned, URL.

        Args:
            path: The API path, optionally including an URL encoded query string.

        Returns:
            The corresponding URL.
        """
        return f"{self.base_url}/v{self.api_version}{path}"

    @staticmethod
    async def _raise_for_status(client_response: ClientResponse):
        """
        Raises an ApiError, carrying the daemon provided message, if the response does not indicate success.

        Args:
            client_response: The client response to be checked.
        """
        if client_response.status < 400:
            return
        try:
            body = await client_response.read()
        except TRANSPORT_ERRORS as exception:
            raise TransportError(f"Failed to read response: {exception}") from exception
        finally:
            client_response.release()

        message = client_response.reason
        if body:
            try:
                payload = json.loads(body)
            except ValueError:
                payload = None
                message = body.decode("utf-8", errors="replace").strip()
            if isinstance(payload, dict) and payload.get("message"):
                message = payload["message"]
        if DockerEngineClientAsync.DEBUG:
            LOGGER.debug(
                "Request failed: %s %s", client_response.status, message
            )
        raise ApiError.from_status(client_response.status, message)

    @staticmethod
    async def _read_json(client_response: ClientResponse) -> Any:
        """
        Retrieves the JSON body of a given client response.

        Args:
            client_response: The client response from which to read the body.

        Returns:
            The JSON body.
        """
        try:
            data = await client_response.read()
        except TRANSPORT_ERRORS as exception:
            raise TransportError(f"Failed to read response: {exception}") from exception
        return JsonBytes(data).get_json()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        body: JsonBytes = None,
        headers: LooseHeaders = None,
        **kwargs,
    ) -> ClientResponse:
        """
        Issues a single request against the docker engine API.

        Args:
            method: The HTTP method.
            path: The API path, optionally including an URL encoded query string.
            body: Optional JSON request body.
            headers: Optional supplemental request headers.
        Keyword Args:
            params: Mapping of (static) query parameter names to values.

        Returns:
            The underlying client response.
        """
        if body is not None:
            headers = dict(headers) if headers else {}
            headers["Content-Type"] = MediaTypes.APPLICATION_JSON
            kwargs["data"] = body.get_bytes()
        headers = await self._get_request_headers(headers=headers)
        url = self._get_url(path)
        if DockerEngineClientAsync.DEBUG:
            LOGGER.debug("%s %s", method, url)

        client_session = await self._get_client_session()
        try:
            client_response = await client_session.request(
                method, url, headers=headers, **kwargs
            )
        except TRANSPORT_ERRORS as exception:
            raise TransportError(
                f"Unable to {method} {url}: {exception}"
            ) from exception
        if DockerEngineClientAsync.DEBUG:
            LOGGER.debug("%s %s -> %s", method, url, client_response.status)
        await DockerEngineClientAsync._raise_for_status(client_response)
        return client_response

    async def delete(self, path: str, **kwargs):
        """
        Deletes a resource.

        Args:
            path: The API path.
        Keyword Args:
            params: Mapping of (static) query parameter names to values.
        """
        client_response = await self._request("DELETE", path, **kwargs)
        client_response.release()

    async def get_json(self, path: str, **kwargs) -> Any:
        """
        Retrieves a resource.

        Args:
            path: The API path, optionally including an URL encoded query string.
        Keyword Args:
            params: Mapping of (static) query parameter names to values.

        Returns:
            The JSON response body.
        """
        client_response = await self._request(
            "GET",
            path,
            headers={"Accept": MediaTypes.APPLICATION_JSON},
            **kwargs,
        )
        return await DockerEngineClientAsync._read_json(client_response)

    async def open_duplex(
        self, path: str, *, multiplexed: bool = True, **kwargs
    ) -> TtyMultiplexer:
        """
        Issues a request whose connection is hijacked by the daemon for bidirectional streaming.

        Args:
            path: The API path.
            multiplexed: If True, the daemon frames stdout / stderr data, otherwise it streams raw TTY data.
        Keyword Args:
            params: Mapping of (static) query parameter names to values.

        Returns:
            The duplex stream.
        """
        client_response = await self._request(
            "POST",
            path,
            headers={
                "Accept": MediaTypes.DOCKER_MULTIPLEXED_STREAM
                if multiplexed
                else MediaTypes.DOCKER_RAW_STREAM
            },
            **kwargs,
        )
        return TtyMultiplexer.from_client_response(
            client_response, multiplexed=multiplexed
        )

    async def post(self, path: str, body: JsonBytes = None, **kwargs):
        """
        Issues an action, discarding any response body.

        Args:
            path: The API path.
            body: Optional JSON request body.
        Keyword Args:
            params: Mapping of (static) query parameter names to values.
        """
        client_response = await self._request("POST", path, body=body, **kwargs)
        client_response.release()

    async def post_json(self, path: str, body: JsonBytes = None, **kwargs) -> Any:
        """
        Issues an action, returning the response body.

        Args:
            path: The API path.
            body: Optional JSON request body.
        Keyword Args:
            params: Mapping of (static) query parameter names to values.

        Returns:
            The JSON response body.
        """
        client_response = await self._request(
            "POST",
            path,
            body=body,
            headers={"Accept": MediaTypes.APPLICATION_JSON},
            **kwargs,
        )
        return await DockerEngineClientAsync._read_json(client_response)

    async def ping(self) -> bool:
        """
        Checks that the docker daemon is reachable.

        Returns:
            True if the daemon responded, False otherwise.
        """
        client_response = await self._request("GET", "/_ping")
        client_response.release()
        return client_response.status == HTTPStatus.OK
