import asyncio
from typing import Coroutine, Generic, Hashable, TypeVar

import structlog

logger = structlog.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class KeyedTaskPool(Generic[K, V]):
    """Runs one asyncio task per key and joins all of them.

    Tasks never cancel each other: a task that fails does not stop its
    siblings, and `settle` only returns once every task is done.
    """

    def __init__(self):
        self.task_pool: dict[K, asyncio.Task[V]] = {}

    def add(self, key: K, coro: Coroutine[None, None, V]):
        """Starts an asyncio task for the given key."""
        if key in self.task_pool:
            coro.close()
            raise ValueError(f"Task for key {key!r} already added")
        self.task_pool[key] = asyncio.create_task(coro, name=f"purge:{key}")

    def count(self):
        """Returns the count of tasks still running."""
        return sum(1 for task in self.task_pool.values() if not task.done())

    async def settle(self) -> dict[K, V]:
        """Waits for every task to finish and returns results keyed like the input."""
        if not self.task_pool:
            return {}
        await asyncio.wait(self.task_pool.values(), return_when=asyncio.ALL_COMPLETED)

        # Every exception is retrieved before the first one is raised
        crashed = []
        for task in self.task_pool.values():
            if (exc := task.exception()) is not None:
                logger.error("Task crashed", task=task.get_name(), exc_info=exc)
                crashed.append(exc)
        if crashed:
            raise crashed[0]

        return {key: task.result() for key, task in self.task_pool.items()}
