#!/usr/bin/env python

"""Attaches to a container, printing its output as it is produced."""

import asyncio
import logging
import sys

from docker_engine_client_async import (
    DecodeError,
    DockerEngineClientAsync,
    StreamType,
    TtyChunk,
)

LOGGER = logging.getLogger(__name__)


def print_chunk(chunk: TtyChunk):
    """Prints a chunk to the console stream corresponding to its origin."""
    text = chunk.data.decode("utf-8", errors="replace")
    if chunk.stream == StreamType.STDERR:
        print(f"Stderr: {text}", end="", file=sys.stderr)
    else:
        print(f"Stdout: {text}", end="")


async def main(container_id: str, docker_host: str = None):
    """Attaches to a given container until its output ends."""
    async with DockerEngineClientAsync(
        docker_host=docker_host
    ) as docker_engine_client_async:
        container = docker_engine_client_async.containers.get(container_id)
        async with await container.attach(stdin=False) as tty_multiplexer:
            reader, _ = tty_multiplexer.split()
            while True:
                try:
                    chunk = await reader.read()
                except DecodeError as exception:
                    LOGGER.error("Error: %s", exception)
                    continue
                if chunk is None:
                    break
                print_chunk(chunk)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) < 2:
        sys.exit(f"usage: {sys.argv[0]} <container id> [docker host]")
    asyncio.run(main(*sys.argv[1:3]))
