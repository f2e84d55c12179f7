"""Bridges between the synchronous API and the async services"""

import asyncio
import concurrent.futures
import functools
from typing import Any, Awaitable, Callable, Coroutine, TypeVar

T = TypeVar('T')


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Drive a coroutine to completion from synchronous code

    When called from inside a running event loop (a notebook, an async
    test) the coroutine gets its own loop on a worker thread.

    Args:
        coro: Coroutine to run

    Returns:
        Coroutine result
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(asyncio.run, coro).result()


def sync_to_async(func: Callable[..., T]) -> Callable[..., Awaitable[T]]:
    """
    Wrap a blocking function so it can be awaited

    The call runs in the loop's default executor, keeping subprocess and
    file I/O off the event loop.
    """

    @functools.wraps(func)
    async def run_in_executor(*args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))

    return run_in_executor
