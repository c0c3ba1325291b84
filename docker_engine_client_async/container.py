#!/usr/bin/env python

"""
Containers; limited to their network settings and attach streams.

https://docs.docker.com/engine/api/v1.41/#tag/Container
"""

from typing import Any, TYPE_CHECKING
from urllib.parse import quote

from .exceptions import DecodeError
from .specs import DockerEndpoints
from .ttymultiplexer import TtyMultiplexer
from .typing import NetworkSettings

if TYPE_CHECKING:
    from .dockerengineclientasync import DockerEngineClientAsync


class Containers:
    """
    Interface for docker containers.
    """

    def __init__(self, docker: "DockerEngineClientAsync"):
        self.docker = docker

    def get(self, container_id: str) -> "Container":
        """
        Returns the set of operations available to a specific container; does not contact the daemon.

        Args:
            container_id: Identifier or name of the container.
        """
        return Container(self.docker, container_id)


class Container:
    """
    Interface for accessing a docker container.
    """

    def __init__(self, docker: "DockerEngineClientAsync", container_id: str):
        self.docker = docker
        self._id = container_id

    def __repr__(self):
        return f"Container({self._id!r})"

    @property
    def id(self) -> str:
        # pylint: disable=invalid-name
        """Identifier or name of the container."""
        return self._id

    async def attach(
        self,
        *,
        detach_keys: str = None,
        logs: bool = False,
        stderr: bool = True,
        stdin: bool = True,
        stdout: bool = True,
    ) -> TtyMultiplexer:
        """
        Attaches to the standard streams of the container.

        https://docs.docker.com/engine/api/v1.41/#operation/ContainerAttach

        Args:
            detach_keys: Key sequence for detaching from the container.
            logs: If True, previous output is replayed before streaming.
            stderr: If True, attach to standard error.
            stdin: If True, attach to standard input.
            stdout: If True, attach to standard output.

        Returns:
            The duplex attach stream.
        """
        # The daemon only frames the output of containers without a TTY ...
        details = await self.inspect()
        config = details.get("Config") or {}
        tty = bool(config.get("Tty", False))

        params = {
            "logs": int(logs),
            "stderr": int(stderr),
            "stdin": int(stdin),
            "stdout": int(stdout),
            "stream": 1,
        }
        if detach_keys:
            params["detachKeys"] = detach_keys
        return await self.docker.open_duplex(
            DockerEndpoints.CONTAINER_ATTACH_PATTERN.format(quote(self._id, safe="")),
            multiplexed=not tty,
            params=params,
        )

    async def inspect(self) -> Any:
        """
        Retrieves the low-level details of the container.

        https://docs.docker.com/engine/api/v1.41/#operation/ContainerInspect

        Returns:
            The container details, as JSON.
        """
        json = await self.docker.get_json(
            DockerEndpoints.CONTAINER_INSPECT_PATTERN.format(quote(self._id, safe=""))
        )
        if not isinstance(json, dict):
            raise DecodeError(f"Expected a JSON object, not: {type(json).__name__}")
        return json

    async def network_settings(self) -> NetworkSettings:
        """
        Retrieves the network settings of the container.

        Returns:
            The network settings.
        """
        details = await self.inspect()
        return NetworkSettings.parse(details.get("NetworkSettings"))
