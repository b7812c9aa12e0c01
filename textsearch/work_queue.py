"""
A simple work queue: a fixed pool of worker threads draining one FIFO of tasks.

Tasks are zero-argument callables. The queue counts pending work (queued or
running) so callers can wait for everything submitted so far, including tasks
submitted by other tasks, with finish().
"""

import logging
import threading
from collections import deque
from typing import Callable

from .config import DEFAULT_THREADS

logger = logging.getLogger(__name__)

Task = Callable[[], object]


class WorkQueue:
    def __init__(self, threads: int = DEFAULT_THREADS) -> None:
        if threads < 1:
            raise ValueError("WorkQueue needs at least one worker thread.")
        self._tasks: deque[Task] = deque()
        self._tasks_available = threading.Condition(threading.Lock())
        self._pending = 0
        self._pending_done = threading.Condition(threading.Lock())
        self._shutdown = False
        self._workers = [
            threading.Thread(target=self._work, name=f"Worker-{i}", daemon=True)
            for i in range(threads)
        ]
        for worker in self._workers:
            worker.start()
        logger.debug("Started work queue with %d workers", threads)

    @property
    def size(self) -> int:
        """Number of worker threads."""
        return len(self._workers)

    @property
    def pending(self) -> int:
        """Number of submitted tasks that have not completed yet."""
        with self._pending_done:
            return self._pending

    def execute(self, task: Task) -> None:
        """Add a task to the queue. Never blocks."""
        with self._tasks_available:
            if self._shutdown:
                raise RuntimeError("cannot execute new tasks after shutdown")
            # Counted before the task is visible to any worker.
            with self._pending_done:
                self._pending += 1
            self._tasks.append(task)
            self._tasks_available.notify()

    def finish(self) -> None:
        """Wait for all pending work to finish. Does not stop the workers."""
        with self._pending_done:
            while self._pending > 0:
                self._pending_done.wait()

    def shutdown(self) -> None:
        """Stop accepting tasks. Workers exit once the queued tasks are done."""
        with self._tasks_available:
            self._shutdown = True
            self._tasks_available.notify_all()

    def join(self) -> None:
        """
        Wait for all work to finish and the worker threads to terminate.
        The queue cannot be reused afterwards.
        """
        self.finish()
        self.shutdown()
        for worker in self._workers:
            worker.join()

    def __enter__(self) -> "WorkQueue":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.join()

    def _decrement_pending(self) -> None:
        with self._pending_done:
            self._pending -= 1
            if self._pending == 0:
                self._pending_done.notify_all()

    def _work(self) -> None:
        while True:
            with self._tasks_available:
                while not self._tasks and not self._shutdown:
                    self._tasks_available.wait()
                if not self._tasks:
                    break
                task = self._tasks.popleft()
            try:
                task()
            except Exception:
                logger.exception("Task %r failed", task)
            finally:
                self._decrement_pending()
        logger.debug("%s exiting", threading.current_thread().name)
