#!/usr/bin/env python

"""Utility classes."""

import os

from functools import wraps, partial

import asyncio

from .typing import StreamType, UtilsChunksToFiles

# https://github.com/docker/docker-py/blob/master/docker/constants.py
CHUNK_SIZE = int(os.environ.get("DECA_CHUNK_SIZE", 2097152))


def async_wrap(func):
    """Decorates a given function for execution via an executor."""
    # https://dev.to/0xbf/turn-sync-function-to-async-python-tips-58nn
    @wraps(func)
    async def run_in_executor(*args, loop=None, executor=None, **kwargs):
        if loop is None:
            loop = asyncio.get_running_loop()
        partial_func = partial(func, *args, **kwargs)
        return await loop.run_in_executor(executor, partial_func)

    return run_in_executor


async def be_kind_rewind(file, *, file_is_async: bool = True):
    """
    Reset the file position (offset) to the absolute beginning.
    Args:
        file: The file for which to reset the offset.
        file_is_async: If True, all file IO operations will be awaited.
    """
    if file_is_async:
        coroutine = file.seek(0)
    else:
        coroutine = async_wrap(file.seek)(0)
    await coroutine


async def chunks_to_files(
    reader, stdout, stderr=None, *, file_is_async: bool = True
) -> UtilsChunksToFiles:
    """
    Asynchronously stores the output of an attach stream to the given files.

    Args:
        reader: The read-half of the attach stream from which to read the chunks.
        stdout: The file to which to store standard output.
        stderr: The file to which to store standard error; defaults to the standard output file.
        file_is_async: If True, all file IO operations will be awaited.

    Returns:
        dict:
            stderr_size: The byte size of the standard error data.
            stdout_size: The byte size of the standard output data.
    """
    if stderr is None:
        stderr = stdout
    sizes = {StreamType.STDERR: 0, StreamType.STDOUT: 0}
    writers = {
        StreamType.STDERR: stderr.write if file_is_async else async_wrap(stderr.write),
        StreamType.STDOUT: stdout.write if file_is_async else async_wrap(stdout.write),
    }
    async for chunk in reader:
        await writers[chunk.stream](chunk.data)
        sizes[chunk.stream] += len(chunk.data)

    await be_kind_rewind(stdout, file_is_async=file_is_async)
    if stderr is not stdout:
        await be_kind_rewind(stderr, file_is_async=file_is_async)

    return UtilsChunksToFiles(
        stderr_size=sizes[StreamType.STDERR], stdout_size=sizes[StreamType.STDOUT]
    )
