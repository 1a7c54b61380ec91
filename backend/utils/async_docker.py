"""
Async wrappers for Docker SDK to prevent event loop blocking.

The official Docker SDK (docker-py) is synchronous. These wrappers use asyncio.to_thread()
to run blocking calls in the default thread pool, keeping the asyncio event loop
responsive while update checks are waiting on the daemon.

Usage:
    from utils.async_docker import async_docker_call, async_containers_list

    # Generic wrapper
    data = await async_docker_call(client.images.get_registry_data, "nginx:1.25")

    # Convenience functions
    containers = await async_containers_list(client, sparse=True)
"""

import asyncio
from typing import Callable, TypeVar, List

T = TypeVar('T')


async def async_docker_call(sync_fn: Callable[..., T], *args, **kwargs) -> T:
    """
    Execute a synchronous Docker SDK call in a thread pool.

    Args:
        sync_fn: Synchronous function to call (e.g., client.images.get)
        *args: Positional arguments to pass to sync_fn
        **kwargs: Keyword arguments to pass to sync_fn

    Returns:
        Result from the synchronous function
    """
    return await asyncio.to_thread(sync_fn, *args, **kwargs)


async def async_containers_list(client, **kwargs) -> List:
    """
    List containers asynchronously.

    Defaults ignore_removed=True to skip ghost containers that appear in
    Docker's list endpoint but 404 on inspect.

    Args:
        client: Docker client instance
        **kwargs: Arguments to pass to containers.list() (e.g., sparse=True)

    Returns:
        List of Container objects
    """
    kwargs.setdefault('ignore_removed', True)
    return await async_docker_call(client.containers.list, **kwargs)


async def async_image_get(client, image_id: str):
    """
    Inspect an image asynchronously.

    Args:
        client: Docker client instance
        image_id: Image ID or reference

    Returns:
        Image object (inspect data in .attrs)
    """
    return await async_docker_call(client.images.get, image_id)
