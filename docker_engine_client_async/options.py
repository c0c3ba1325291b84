#!/usr/bin/env python

"""
Request options, and the builders that assemble them.

Builders accumulate fixed docker API keys through chained setters; build() returns an immutable snapshot that is
unaffected by any further use of the builder.
"""

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import urlencode

import canonicaljson

from .jsonbytes import JsonBytes
from .specs import NetworkFilters


class OptionsBuilder:
    """Mutable accumulator of option key / value pairs."""

    def __init__(self, params: Dict[str, Any] = None):
        """
        Args:
            params: Initial option values.
        """
        self.params = params if params else {}

    def _set(self, key: str, value: Any) -> "OptionsBuilder":
        """Inserts, or overwrites, a single option."""
        self.params[key] = value
        return self


class NetworkListOptions:
    """
    Query options for filtering the network list.
    """

    def __init__(self, params: Mapping[str, str] = None):
        """
        Args:
            params: Mapping of query parameter names to values.
        """
        self._params = dict(params) if params else {}

    def __eq__(self, other):
        return isinstance(other, NetworkListOptions) and self._params == other._params

    def __hash__(self):
        return hash(tuple(sorted(self._params.items())))

    def __repr__(self):
        return f"NetworkListOptions({self._params!r})"

    @staticmethod
    def builder() -> "NetworkListOptionsBuilder":
        """Returns a new builder for network list options."""
        return NetworkListOptionsBuilder()

    def get_params(self) -> Dict[str, str]:
        """Retrieves a copy of the query parameters."""
        return dict(self._params)

    def serialize(self) -> Optional[str]:
        """
        Serializes the options as an URL encoded query string.

        Returns:
            The query string, or None if no options are defined.
        """
        if not self._params:
            return None
        return urlencode(sorted(self._params.items()))


class NetworkListOptionsBuilder(OptionsBuilder):
    """
    Builder for NetworkListOptions.

    https://docs.docker.com/engine/api/v1.41/#operation/NetworkList
    """

    def _filter(self, name: str, values: Iterable[str]) -> "NetworkListOptionsBuilder":
        return self._set(name, [str(value) for value in values])

    def dangling(self, dangling: bool = True) -> "NetworkListOptionsBuilder":
        """Matches networks that are (not) in use by a container."""
        return self._filter(NetworkFilters.DANGLING, ["true" if dangling else "false"])

    def driver(self, *drivers: str) -> "NetworkListOptionsBuilder":
        """Matches networks by driver name."""
        return self._filter(NetworkFilters.DRIVER, drivers)

    def id(self, *ids: str) -> "NetworkListOptionsBuilder":
        # pylint: disable=invalid-name
        """Matches networks by (partial) identifier."""
        return self._filter(NetworkFilters.ID, ids)

    def label(self, *labels: str) -> "NetworkListOptionsBuilder":
        """Matches networks by label; each in the form <key> or <key>=<value>."""
        return self._filter(NetworkFilters.LABEL, labels)

    def name(self, *names: str) -> "NetworkListOptionsBuilder":
        """Matches networks by (partial) name."""
        return self._filter(NetworkFilters.NAME, names)

    def scope(self, *scopes: str) -> "NetworkListOptionsBuilder":
        """Matches networks by scope; one of swarm, global, or local."""
        return self._filter(NetworkFilters.SCOPE, scopes)

    def type(self, *types: str) -> "NetworkListOptionsBuilder":
        """Matches networks by type; one of custom or builtin."""
        return self._filter(NetworkFilters.TYPE, types)

    def build(self) -> NetworkListOptions:
        """Returns an immutable snapshot of the accumulated filters."""
        params = {}
        if self.params:
            params["filters"] = canonicaljson.encode_canonical_json(
                self.params
            ).decode("utf-8")
        return NetworkListOptions(params)


class NetworkCreateOptions(JsonBytes):
    """
    Request body used to create a network.
    """

    @staticmethod
    def builder(name: str) -> "NetworkCreateOptionsBuilder":
        """
        Returns a new builder for network create options.

        Args:
            name: The name of the network to be created.
        """
        return NetworkCreateOptionsBuilder(name)

    def serialize(self) -> bytes:
        """Serializes the options as a JSON request body."""
        return self.get_bytes()


class NetworkCreateOptionsBuilder(OptionsBuilder):
    """
    Builder for NetworkCreateOptions.

    https://docs.docker.com/engine/api/v1.41/#operation/NetworkCreate
    """

    def __init__(self, name: str):
        super().__init__({"Name": name})

    def attachable(self, attachable: bool = True) -> "NetworkCreateOptionsBuilder":
        """Allows manual container attachment to a swarm scoped network."""
        return self._set("Attachable", attachable)

    def check_duplicate(self, check: bool = True) -> "NetworkCreateOptionsBuilder":
        """Asks the daemon to reject networks with a duplicate name."""
        return self._set("CheckDuplicate", check)

    def driver(self, driver: str) -> "NetworkCreateOptionsBuilder":
        """Assigns the network driver plugin."""
        return self._set("Driver", driver)

    def enable_ipv6(self, enable: bool = True) -> "NetworkCreateOptionsBuilder":
        """Enables IPv6 on the network."""
        return self._set("EnableIPv6", enable)

    def internal(self, internal: bool = True) -> "NetworkCreateOptionsBuilder":
        """Restricts external access to the network."""
        return self._set("Internal", internal)

    def ipam(
        self,
        *,
        config: List[Mapping[str, str]] = None,
        driver: str = "default",
        options: Mapping[str, str] = None,
    ) -> "NetworkCreateOptionsBuilder":
        """
        Assigns the IP address management configuration.

        Args:
            config: List of subnet configurations (Subnet, IPRange, Gateway, AuxAddress).
            driver: Name of the IPAM driver.
            options: Driver specific options.
        """
        ipam = {"Driver": driver}
        if config is not None:
            ipam["Config"] = [dict(item) for item in config]
        if options is not None:
            ipam["Options"] = dict(options)
        return self._set("IPAM", ipam)

    def labels(self, labels: Mapping[str, str]) -> "NetworkCreateOptionsBuilder":
        """Assigns user-defined key / value metadata."""
        return self._set("Labels", dict(labels))

    def options(self, options: Mapping[str, str]) -> "NetworkCreateOptionsBuilder":
        """Assigns driver specific options."""
        return self._set("Options", dict(options))

    def build(self) -> NetworkCreateOptions:
        """Returns an immutable snapshot of the accumulated options."""
        return NetworkCreateOptions.from_json(self.params)


class ContainerConnectionOptions(JsonBytes):
    """
    Request body used to connect a container to, or disconnect it from, a network.
    """

    @staticmethod
    def builder(container_id: str) -> "ContainerConnectionOptionsBuilder":
        """
        Returns a new builder for container connection options.

        Args:
            container_id: Identifier or name of the container.
        """
        return ContainerConnectionOptionsBuilder(container_id)

    def serialize(self) -> bytes:
        """Serializes the options as a JSON request body."""
        return self.get_bytes()


class ContainerConnectionOptionsBuilder(OptionsBuilder):
    """
    Builder for ContainerConnectionOptions.

    https://docs.docker.com/engine/api/v1.41/#operation/NetworkConnect
    https://docs.docker.com/engine/api/v1.41/#operation/NetworkDisconnect
    """

    def __init__(self, container_id: str):
        super().__init__({"Container": container_id})
        self.endpoint_config = {}

    def aliases(self, aliases: Iterable[str]) -> "ContainerConnectionOptionsBuilder":
        """Assigns the network scoped aliases of the container (connect only)."""
        self.endpoint_config["Aliases"] = list(aliases)
        return self

    def force(self, force: bool = True) -> "ContainerConnectionOptionsBuilder":
        """Forces the container to disconnect (disconnect only)."""
        return self._set("Force", force)

    def ipv4_address(self, address: str) -> "ContainerConnectionOptionsBuilder":
        """Assigns a static IPv4 address to the endpoint (connect only)."""
        self.endpoint_config.setdefault("IPAMConfig", {})["IPv4Address"] = address
        return self

    def ipv6_address(self, address: str) -> "ContainerConnectionOptionsBuilder":
        """Assigns a static IPv6 address to the endpoint (connect only)."""
        self.endpoint_config.setdefault("IPAMConfig", {})["IPv6Address"] = address
        return self

    def build(self) -> ContainerConnectionOptions:
        """Returns an immutable snapshot of the accumulated options."""
        params = dict(self.params)
        if self.endpoint_config:
            params["EndpointConfig"] = deepcopy(self.endpoint_config)
        return ContainerConnectionOptions.from_json(params)
