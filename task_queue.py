from typing import Any, Awaitable, Callable, List, Optional
import asyncio
import logging

logger = logging.getLogger(__name__)

Executor = Callable[[Any], Awaitable[None]]


class TaskQueue:
    """In-process job queue drained by a pool of asyncio worker tasks.

    ``enqueue`` never blocks: the job is handed to a worker which awaits the
    executor. Exceptions escaping the executor are logged and the worker moves
    on to the next job.
    """

    def __init__(self, executor: Executor, worker_count: int = 1, maxsize: int = 0):
        if worker_count < 1:
            raise ValueError("worker_count must be at least 1")
        self._executor = executor
        self.worker_count = worker_count
        self.maxsize = maxsize
        self._queue: Optional[asyncio.Queue] = None
        self._workers: List[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._workers)

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    async def start(self) -> None:
        if self._workers:
            return
        self._queue = asyncio.Queue(self.maxsize)
        self._workers = [
            asyncio.create_task(self._worker(index), name=f"task-queue-worker-{index}")
            for index in range(self.worker_count)
        ]
        logger.info(f"Started {self.worker_count} task queue worker(s)")

    def enqueue(self, job: Any) -> None:
        """Queue a job and return immediately."""
        if self._queue is None:
            raise RuntimeError("TaskQueue is not running, call start() first")
        self._queue.put_nowait(job)

    async def put(self, job: Any) -> None:
        self.enqueue(job)

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        if self._queue is not None:
            await self._queue.join()

    async def stop(self, drain: bool = True) -> None:
        if not self._workers:
            return
        if drain:
            await self.join()
        for worker in self._workers:
            worker.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        self._queue = None
        logger.info("Task queue workers stopped")

    async def _worker(self, index: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self._executor(job)
            except Exception:
                logger.exception(f"Worker {index} failed while processing job {job!r}")
            finally:
                self._queue.task_done()
