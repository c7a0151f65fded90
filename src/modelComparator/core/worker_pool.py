"""
Bounded worker pool owned by one comparison run.

Each submitted task is keyed by a name and gets its own cancel event, so one
family can be cancelled without touching the others.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Callable, Dict, Iterable, Iterator, Optional, Tuple

from ..utils.logger import get_logger


class WorkerPool:
    """ThreadPoolExecutor with per-task cancellation."""

    def __init__(self, max_workers: int = 4):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self.max_workers = max_workers
        self.logger = get_logger("WorkerPool")
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="family")
        self._futures: Dict[str, Future] = {}
        self._events: Dict[str, threading.Event] = {}
        self._lock = threading.Lock()

    def __enter__(self) -> 'WorkerPool':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(cancel_pending=exc_type is not None)

    def submit(self, name: str, fn: Callable, *args, **kwargs) -> Future:
        """
        Schedule fn(*args, cancel_event=<event>, **kwargs) under a unique name.
        """
        with self._lock:
            if name in self._futures:
                raise ValueError(f"A task named '{name}' was already submitted")
            event = threading.Event()
            future = self._executor.submit(fn, *args, cancel_event=event, **kwargs)
            self._events[name] = event
            self._futures[name] = future
        return future

    def cancel(self, name: str) -> bool:
        """
        Cancel one task.

        A pending task is dropped from the queue; a running task sees its
        cancel event set.

        Returns:
            True if the task had not finished yet
        """
        with self._lock:
            if name not in self._futures:
                raise KeyError(f"No task named '{name}'")
            future = self._futures[name]
            self._events[name].set()
        if future.done():
            return False
        future.cancel()
        self.logger.info(f"Cancellation requested for '{name}'")
        return True

    def futures(self) -> Dict[str, Future]:
        with self._lock:
            return dict(self._futures)

    def as_completed(self, names: Optional[Iterable[str]] = None) -> Iterator[Tuple[str, Future]]:
        """(name, future) pairs as tasks finish; all tasks unless names are given."""
        futures = self.futures()
        if names is not None:
            futures = {name: futures[name] for name in names}
        names = {future: name for name, future in futures.items()}
        for future in as_completed(names):
            yield names[future], future

    def shutdown(self, cancel_pending: bool = False) -> None:
        if cancel_pending:
            with self._lock:
                for event in self._events.values():
                    event.set()
        self._executor.shutdown(wait=True, cancel_futures=cancel_pending)
