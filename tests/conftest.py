#!/usr/bin/env python

# pylint: disable=redefined-outer-name

"""Configures execution of pytest."""

import pytest

from aiohttp.test_utils import TestServer

from docker_engine_client_async import DockerEngineClientAsync

from .testutils import FakeDockerDaemon


def pytest_addoption(parser):
    """pytest add option."""
    parser.addoption(
        "--allow-online",
        action="store_true",
        default=False,
        help="Allow execution of online tests.",
    )
    parser.addoption(
        "--allow-online-modification",
        action="store_true",
        default=False,
        help="Allow modification of online content (implies --allow-online).",
    )


def pytest_collection_modifyitems(config, items):
    """pytest collection modifier."""

    skip_online = pytest.mark.skip(
        reason="Execution of online tests requires --allow-online option."
    )
    skip_online_modification = pytest.mark.skip(
        reason="Modification of online content requires --allow-online-modification option."
    )
    for item in items:
        if "online_modification" in item.keywords and not config.getoption(
            "--allow-online-modification"
        ):
            item.add_marker(skip_online_modification)
        elif (
            "online" in item.keywords
            and not config.getoption("--allow-online")
            and not config.getoption("--allow-online-modification")
        ):
            item.add_marker(skip_online)


def pytest_configure(config):
    """pytest configuration hook."""
    config.addinivalue_line(
        "markers", "online: allow execution of tests against a docker daemon."
    )
    config.addinivalue_line(
        "markers",
        "online_modification: allow modification of docker daemon content.",
    )


@pytest.fixture
def fake_docker_daemon() -> FakeDockerDaemon:
    """Provides an in-process docker daemon stand-in."""
    return FakeDockerDaemon()


@pytest.fixture
async def fake_docker_host(fake_docker_daemon: FakeDockerDaemon) -> str:
    """Serves the fake docker daemon, providing its address."""
    async with TestServer(fake_docker_daemon.make_app()) as server:
        yield f"tcp://{server.host}:{server.port}"


@pytest.fixture
async def docker_engine_client_async(fake_docker_host: str) -> DockerEngineClientAsync:
    """Provides a DockerEngineClientAsync instance connected to the fake docker daemon."""
    # Do not use caching; get a new instance for each test
    async with DockerEngineClientAsync(
        docker_host=fake_docker_host
    ) as docker_engine_client_async:
        yield docker_engine_client_async
