#!/usr/bin/env python

"""
Create and manage user-defined networks that containers can be attached to.

https://docs.docker.com/engine/api/v1.41/#tag/Network
"""

import logging

from typing import List, TYPE_CHECKING
from urllib.parse import quote

from .options import ContainerConnectionOptions, NetworkCreateOptions, NetworkListOptions
from .specs import DockerEndpoints, NetworkActions
from .typing import NetworkCreateInfo, NetworkDetails, NetworkInfo

if TYPE_CHECKING:
    from .dockerengineclientasync import DockerEngineClientAsync

LOGGER = logging.getLogger(__name__)


class Networks:
    """
    Interface for docker networks.
    """

    def __init__(self, docker: "DockerEngineClientAsync"):
        """
        Args:
            docker: The connection to the docker daemon.
        """
        self.docker = docker

    async def create(self, options: NetworkCreateOptions) -> NetworkCreateInfo:
        """
        Creates a new network.

        https://docs.docker.com/engine/api/v1.41/#operation/NetworkCreate

        Args:
            options: The network create options.

        Returns:
            The identifier of the new network, and any warning issued by the daemon.
        """
        json = await self.docker.post_json(DockerEndpoints.NETWORK_CREATE, options)
        result = NetworkCreateInfo.parse(json)
        if result.warning:
            LOGGER.warning("Network %s created with warning: %s", result.id, result.warning)
        return result

    def get(self, network_id: str) -> "Network":
        """
        Returns the set of operations available to a specific network; does not contact the daemon.

        Args:
            network_id: Identifier or name of the network.
        """
        return Network(self.docker, network_id)

    async def list(self, options: NetworkListOptions = None) -> List[NetworkInfo]:
        """
        Lists the networks on the docker host.

        https://docs.docker.com/engine/api/v1.41/#operation/NetworkList

        Args:
            options: Optional network list filters.

        Returns:
            The matching networks.
        """
        path = DockerEndpoints.NETWORKS
        query = options.serialize() if options else None
        if query:
            path = f"{path}?{query}"
        json = await self.docker.get_json(path)
        return NetworkInfo.parse_list(json)


class Network:
    """
    Interface for accessing and manipulating a docker network.
    """

    def __init__(self, docker: "DockerEngineClientAsync", network_id: str):
        """
        Args:
            docker: The connection to the docker daemon.
            network_id: Identifier or name of the network.
        """
        self.docker = docker
        self._id = network_id

    def __repr__(self):
        return f"Network({self._id!r})"

    @property
    def id(self) -> str:
        # pylint: disable=invalid-name
        """Identifier or name of the network."""
        return self._id

    def _get_path(self, action: str = None) -> str:
        network_id = quote(self._id, safe="")
        if action:
            return DockerEndpoints.NETWORK_ACTION_PATTERN.format(network_id, action)
        return DockerEndpoints.NETWORK_PATTERN.format(network_id)

    async def _do_connection(self, action: str, options: ContainerConnectionOptions):
        await self.docker.post(self._get_path(action), options)

    async def connect(self, options: ContainerConnectionOptions):
        """
        Connects a container to the network.

        https://docs.docker.com/engine/api/v1.41/#operation/NetworkConnect

        Args:
            options: The container connection options.
        """
        await self._do_connection(NetworkActions.CONNECT, options)

    async def delete(self):
        """
        Removes the network.

        https://docs.docker.com/engine/api/v1.41/#operation/NetworkDelete
        """
        await self.docker.delete(self._get_path())

    async def disconnect(self, options: ContainerConnectionOptions):
        """
        Disconnects a container from the network.

        https://docs.docker.com/engine/api/v1.41/#operation/NetworkDisconnect

        Args:
            options: The container connection options.
        """
        await self._do_connection(NetworkActions.DISCONNECT, options)

    async def inspect(self) -> NetworkDetails:
        """
        Retrieves the details of the network.

        https://docs.docker.com/engine/api/v1.41/#operation/NetworkInspect

        Returns:
            The network details.
        """
        json = await self.docker.get_json(self._get_path())
        return NetworkDetails.parse(json)
