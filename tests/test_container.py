#!/usr/bin/env python

"""Container tests."""

from urllib.parse import parse_qs, urlparse

import pytest

from docker_engine_client_async import (
    DockerEngineClientAsync,
    NetworkSettings,
    NotFoundError,
    ProtocolViolation,
    StreamType,
    TtyChunk,
)

from .testutils import FakeDockerDaemon, frame

pytestmark = [pytest.mark.asyncio]


async def test_get(
    docker_engine_client_async: DockerEngineClientAsync,
    fake_docker_daemon: FakeDockerDaemon,
):
    """Test that retrieving a container handle does not contact the daemon."""
    container = docker_engine_client_async.containers.get("does-not-exist")
    assert container.id == "does-not-exist"
    assert not fake_docker_daemon.requests


async def test_network_settings(
    docker_engine_client_async: DockerEngineClientAsync,
    fake_docker_daemon: FakeDockerDaemon,
):
    """Test that the network settings of a container can be retrieved."""
    container_id = fake_docker_daemon.add_container("web")
    container = docker_engine_client_async.containers.get("web")
    settings = await container.network_settings()
    assert isinstance(settings, NetworkSettings)
    assert settings.ip_address == "172.17.0.2"
    assert settings.ports["80/tcp"][0]["HostPort"] == "8080"
    bridge = settings.networks["bridge"]
    assert bridge.gateway == "172.17.0.1"
    assert bridge.ip_prefix_len == 16
    assert bridge.aliases is None
    assert fake_docker_daemon.requests[-1][1] == "/v1.41/containers/web/json"
    assert (await container.inspect())["Id"] == container_id


async def test_network_settings_not_found(
    docker_engine_client_async: DockerEngineClientAsync,
):
    """Test that an unknown container is reported as not found."""
    container = docker_engine_client_async.containers.get("does-not-exist")
    with pytest.raises(NotFoundError) as exc_info:
        await container.network_settings()
    assert exc_info.value.is_not_found


async def test_attach_multiplexed(
    docker_engine_client_async: DockerEngineClientAsync,
    fake_docker_daemon: FakeDockerDaemon,
):
    """Test that the output of a container without a TTY is demultiplexed."""
    payload = frame(StreamType.STDOUT, b"hello") + frame(StreamType.STDERR, b"err")
    container_id = fake_docker_daemon.add_container(
        "multiplexed", payload=[payload[:5], payload[5:]]
    )
    container = docker_engine_client_async.containers.get(container_id)
    async with await container.attach(logs=True, stdin=False) as multiplexer:
        reader, _ = multiplexer.split()
        chunks = [chunk async for chunk in reader]
    assert chunks == [TtyChunk.stdout(b"hello"), TtyChunk.stderr(b"err")]

    method, path, _ = fake_docker_daemon.requests[-1]
    assert method == "POST"
    url = urlparse(path)
    assert url.path == f"/v1.41/containers/{container_id}/attach"
    assert parse_qs(url.query) == {
        "logs": ["1"],
        "stderr": ["1"],
        "stdin": ["0"],
        "stdout": ["1"],
        "stream": ["1"],
    }


async def test_attach_detach_keys(
    docker_engine_client_async: DockerEngineClientAsync,
    fake_docker_daemon: FakeDockerDaemon,
):
    """Test that the detach key sequence is forwarded to the daemon."""
    fake_docker_daemon.add_container("detachable")
    container = docker_engine_client_async.containers.get("detachable")
    async with await container.attach(detach_keys="ctrl-x,x") as multiplexer:
        assert await multiplexer.reader.read() is None
    query = parse_qs(urlparse(fake_docker_daemon.requests[-1][1]).query)
    assert query["detachKeys"] == ["ctrl-x,x"]


async def test_attach_tty(
    docker_engine_client_async: DockerEngineClientAsync,
    fake_docker_daemon: FakeDockerDaemon,
):
    """Test that the output of a container with a TTY is reported as raw stdout."""
    data = frame(StreamType.STDERR, b"looks like a frame") + b"$ "
    fake_docker_daemon.add_container("tty", payload=[data], tty=True)
    container = docker_engine_client_async.containers.get("tty")
    async with await container.attach() as multiplexer:
        chunks = [chunk async for chunk in multiplexer.reader]
    assert all(chunk.stream == StreamType.STDOUT for chunk in chunks)
    assert b"".join(chunk.data for chunk in chunks) == data


async def test_attach_stdin_frame(
    docker_engine_client_async: DockerEngineClientAsync,
    fake_docker_daemon: FakeDockerDaemon,
):
    """Test that a stdin frame sent by the daemon is reported as a protocol violation."""
    payload = frame(StreamType.STDOUT, b"ok") + frame(StreamType.STDIN, b"bad")
    fake_docker_daemon.add_container("violation", payload=[payload])
    container = docker_engine_client_async.containers.get("violation")
    async with await container.attach() as multiplexer:
        assert await multiplexer.reader.read() == TtyChunk.stdout(b"ok")
        with pytest.raises(ProtocolViolation):
            await multiplexer.reader.read()


async def test_attach_not_found(docker_engine_client_async: DockerEngineClientAsync):
    """Test that attaching to an unknown container is reported as not found."""
    container = docker_engine_client_async.containers.get("does-not-exist")
    with pytest.raises(NotFoundError):
        await container.attach()
